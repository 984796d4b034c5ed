from django.core.management.base import BaseCommand, CommandError

from clinic.services.rooms import room_summary, seed_rooms


class Command(BaseCommand):
    help = "Replace all rooms with Room 1..N, every one Available."

    def add_arguments(self, parser):
        parser.add_argument("--count", type=int, default=20, help="Number of rooms to create (default 20).")

    def handle(self, *args, **options):
        count = options["count"]
        if count < 1:
            raise CommandError("--count must be at least 1")
        seed_rooms(count)
        summary = room_summary()
        self.stdout.write(self.style.SUCCESS(
            f"Initialized {summary['total']} rooms ({summary['available']} available)."
        ))
