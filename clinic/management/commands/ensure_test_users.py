# clinic/management/commands/ensure_test_users.py
from django.contrib.auth.hashers import make_password
from django.core.management.base import BaseCommand

from clinic.models import User

TEST_SET = [
    ("receptionist@medilink.local", "Rina Receptionist", User.ROLE_RECEPTIONIST),
    ("nurse@medilink.local", "Nadia Nurse", User.ROLE_NURSE),
    ("doctor@medilink.local", "Dr. Dimas", User.ROLE_DOCTOR),
]


class Command(BaseCommand):
    help = "Ensure one test account per role exists with the given password (idempotent)."

    def add_arguments(self, parser):
        parser.add_argument("--password", default="123456", help="Password to set on every test account.")

    def handle(self, *args, **opts):
        password = make_password(opts["password"])
        for email, name, role in TEST_SET:
            u, created = User.objects.get_or_create(
                email=email,
                defaults={"name": name, "role": role, "password": password, "is_active": True},
            )
            if not created:
                # reset password, role and active flag on existing rows
                u.password = password
                u.role = role
                u.is_active = True
                u.save(update_fields=["password", "role", "is_active"])
            self.stdout.write(self.style.SUCCESS(f"ok: {email} ({role})"))
        self.stdout.write(self.style.SUCCESS("All test users ensured."))
