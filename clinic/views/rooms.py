"""
Room views.

Rooms are listed by room number.  Status is either ``Available`` or
``Occupied``; the summary endpoint counts both at request time.
"""
from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework import status

from clinic.models import Room
from clinic.permissions import policy_for
from clinic.serializers.room import RoomSerializer
from clinic.services.rooms import room_summary
from clinic.shortcuts import get_object_or_404


def _serialize(room: Room) -> dict:
    return {
        'id': room.id,
        '_id': room.id,
        'name': room.name,
        'roomNumber': room.room_number,
        'status': room.status,
        'createdAt': room.created_at.isoformat() if room.created_at else None,
        'updatedAt': room.updated_at.isoformat() if room.updated_at else None,
    }


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, policy_for('rooms')])
def rooms_collection(request):
    if request.method == 'GET':
        return Response([_serialize(r) for r in Room.objects.order_by('room_number')])
    s = RoomSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    room = s.save()
    return Response(_serialize(room), status=status.HTTP_201_CREATED)


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsAuthenticated, policy_for('rooms')])
def room_detail(request, pk: int):
    room = get_object_or_404(Room, pk, 'Room')
    if request.method == 'GET':
        return Response(_serialize(room))
    if request.method == 'PUT':
        s = RoomSerializer(room, data=request.data, partial=True)
        s.is_valid(raise_exception=True)
        room = s.save()
        return Response(_serialize(room))
    # DELETE
    room.delete()
    return Response({'message': 'Room deleted'})


@api_view(['GET'])
@permission_classes([IsAuthenticated, policy_for('rooms')])
def rooms_summary(request):
    """Return ``{total, available, occupied}``."""
    return Response(room_summary())
