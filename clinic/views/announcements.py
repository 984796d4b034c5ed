"""
Announcement board.

Any staff member may read and post announcements.  The author defaults
to the poster's name; urgency is ``normal`` or ``urgent``.
"""
from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework import status

from clinic.models import Announcement
from clinic.permissions import policy_for
from clinic.serializers.announcement import AnnouncementSerializer
from clinic.shortcuts import get_object_or_404


def _serialize(a: Announcement) -> dict:
    return {
        'id': a.id,
        '_id': a.id,
        'title': a.title,
        'content': a.content,
        'urgency': a.urgency,
        'critical': a.urgency == Announcement.URGENCY_URGENT,
        'author': a.author,
        'date': a.created_at.isoformat() if a.created_at else None,
        'createdAt': a.created_at.isoformat() if a.created_at else None,
        'updatedAt': a.updated_at.isoformat() if a.updated_at else None,
    }


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, policy_for('announcements')])
def announcements_collection(request):
    if request.method == 'GET':
        return Response([_serialize(a) for a in Announcement.objects.order_by('-created_at', '-id')])
    s = AnnouncementSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    author = s.validated_data.get('author') or request.user.name or request.user.email
    announcement = s.save(author=author)
    return Response(_serialize(announcement), status=status.HTTP_201_CREATED)


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsAuthenticated, policy_for('announcements')])
def announcement_detail(request, pk: int):
    announcement = get_object_or_404(Announcement, pk, 'Announcement')
    if request.method == 'GET':
        return Response(_serialize(announcement))
    if request.method == 'PUT':
        s = AnnouncementSerializer(announcement, data=request.data, partial=True)
        s.is_valid(raise_exception=True)
        announcement = s.save()
        return Response(_serialize(announcement))
    # DELETE
    announcement.delete()
    return Response({'message': 'Announcement deleted'})
