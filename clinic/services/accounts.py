"""
Staff account helpers: registration, credential checks and token issue.
"""
from __future__ import annotations

import structlog
from django.contrib.auth import authenticate
from django.db import IntegrityError, transaction
from rest_framework.exceptions import ValidationError
from rest_framework_simplejwt.settings import api_settings
from rest_framework_simplejwt.tokens import AccessToken

from clinic.models import User

logger = structlog.get_logger(__name__)

INVALID_CREDENTIALS = 'Invalid credentials'
ROLE_MISMATCH = 'Role mismatch. Please choose the correct role.'


class LoginError(Exception):
    """Raised when a login attempt must be refused with 401."""

    def __init__(self, message: str, reason: str):
        super().__init__(message)
        self.message = message
        self.reason = reason


def register_user(*, role: str, name: str, email: str, password: str) -> User:
    if User.objects.filter(email__iexact=email).exists():
        raise ValidationError('User already exists')
    try:
        with transaction.atomic():
            user = User.objects.create_user(email=email, password=password, name=name, role=role)
    except IntegrityError:
        # concurrent registration with the same email
        raise ValidationError('User already exists')
    logger.info('user_registered', user_id=user.id, role=user.role)
    return user


def authenticate_staff(request, *, email: str, password: str, selected_role: str | None = None) -> User:
    """Return the user for valid credentials or raise :class:`LoginError`.

    ``selected_role`` is the role the person picked on the login screen;
    when given it must match the stored role (case-insensitive).
    """
    user = authenticate(request, email=email, password=password)
    if user is None:
        logger.warning('login_failed', email=email, reason='credentials')
        raise LoginError(INVALID_CREDENTIALS, 'credentials')
    if selected_role and selected_role.strip().lower() != (user.role or '').lower():
        logger.warning('login_failed', email=email, reason='role_mismatch', selected_role=selected_role)
        raise LoginError(ROLE_MISMATCH, 'role_mismatch')
    logger.info('login_succeeded', user_id=user.id, role=user.role)
    return user


def issue_token(user: User) -> str:
    """Signed access token carrying the user id and role."""
    token = AccessToken.for_user(user)
    # newer simplejwt releases stringify the id; keep it the same type as user.id
    token[api_settings.USER_ID_CLAIM] = user.id
    token['role'] = user.role
    return str(token)


def format_user(user: User) -> dict:
    return {
        'id': user.id,
        '_id': user.id,
        'name': user.name,
        'email': user.email,
        'role': user.role,
    }
