from __future__ import annotations

from django.db import transaction
from django.db.models import Count, Q

from clinic.models import Room


def room_summary() -> dict:
    counts = Room.objects.aggregate(
        total=Count('id'),
        available=Count('id', filter=Q(status=Room.STATUS_AVAILABLE)),
        occupied=Count('id', filter=Q(status=Room.STATUS_OCCUPIED)),
    )
    return {k: counts[k] or 0 for k in ('total', 'available', 'occupied')}


def seed_rooms(count: int = 20) -> list[Room]:
    """Replace every room with ``Room 1`` .. ``Room <count>``, all available."""
    with transaction.atomic():
        Room.objects.all().delete()
        return Room.objects.bulk_create(
            Room(name=f'Room {n}', room_number=n) for n in range(1, count + 1)
        )
