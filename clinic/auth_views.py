"""
Authentication views.

Registration and email/password login for staff, plus the profile of
the current bearer.  Login and registration ignore any Authorization
header so a stale token in the browser cannot block a fresh login.
"""
from __future__ import annotations

from rest_framework.decorators import api_view, authentication_classes, permission_classes, throttle_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework import status

from clinic.serializers.auth import LoginSerializer, RegisterSerializer
from clinic.services.accounts import (
    LoginError,
    authenticate_staff,
    format_user,
    issue_token,
    register_user,
)
from clinic.throttling import LoginRateThrottle


@api_view(['POST'])
@authentication_classes([])
@permission_classes([AllowAny])
def register_view(request):
    """Create a staff account.  Fields: role, name, email, password."""
    s = RegisterSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    register_user(**s.validated_data)
    return Response({'message': 'User registered successfully'}, status=status.HTTP_201_CREATED)


@api_view(['POST'])
@authentication_classes([])
@permission_classes([AllowAny])
@throttle_classes([LoginRateThrottle])
def login_view(request):
    """
    Email/password login.
    Accepts fields:
      - email
      - password
      - selectedRole (optional; must match the account's role)
    Returns a bearer token valid for one day and the user summary.
    """
    s = LoginSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    vd = s.validated_data
    try:
        user = authenticate_staff(
            request,
            email=vd['email'],
            password=vd['password'],
            selected_role=vd.get('selectedRole'),
        )
    except LoginError as e:
        return Response({'message': e.message}, status=status.HTTP_401_UNAUTHORIZED)
    return Response({'token': issue_token(user), 'user': format_user(user)})


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def profile_view(request):
    """Return the user the bearer token belongs to."""
    return Response(format_user(request.user))
