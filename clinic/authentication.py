"""
Bearer token authentication for the API.

Tokens are simplejwt access tokens carrying the user ``id`` and
``role``.  Keeping the class in its own module avoids circular imports
when DRF loads authentication classes from settings.
"""
from __future__ import annotations

from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import AuthenticationFailed


class BearerJWTAuthentication(JWTAuthentication):
    """JWT authentication that also checks the ``role`` claim.

    A token issued before the user's role changed is rejected so that a
    stale token cannot keep the old role's access.
    """

    def get_user(self, validated_token):
        user = super().get_user(validated_token)
        claimed = validated_token.get('role')
        if claimed and claimed != user.role:
            raise AuthenticationFailed('Token role no longer matches user', code='role_changed')
        return user
