"""
Staff user views.

Anyone signed in may look up colleagues (e.g. the doctor list used when
booking appointments).  Changing or removing an account is limited to
the account's owner.
"""
from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import PermissionDenied
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from clinic.models import User
from clinic.permissions import policy_for
from clinic.serializers.user import UserUpdateSerializer
from clinic.services.accounts import format_user
from clinic.shortcuts import get_object_or_404


@api_view(['GET'])
@permission_classes([IsAuthenticated, policy_for('users')])
def users_list(request):
    qs = User.objects.filter(is_active=True).order_by('name', 'id')
    role = request.query_params.get('role')
    if role:
        qs = qs.filter(role=role.lower())
    return Response([format_user(u) for u in qs])


@api_view(['GET'])
@permission_classes([IsAuthenticated, policy_for('users')])
def doctors_list(request):
    qs = User.objects.filter(role=User.ROLE_DOCTOR, is_active=True).order_by('name', 'id')
    return Response([{'id': u.id, '_id': u.id, 'name': u.name} for u in qs])


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsAuthenticated, policy_for('users')])
def user_detail(request, pk: int):
    user = get_object_or_404(User, pk, 'User')
    if request.method == 'GET':
        return Response({'id': user.id, '_id': user.id, 'name': user.name, 'role': user.role})
    if user.id != request.user.id:
        raise PermissionDenied('You may only change your own account.')
    if request.method == 'PUT':
        s = UserUpdateSerializer(user, data=request.data, partial=True)
        s.is_valid(raise_exception=True)
        user = s.save()
        return Response(format_user(user))
    # DELETE
    user.delete()
    return Response({'message': 'User deleted'})
