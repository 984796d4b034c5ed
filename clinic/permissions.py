"""
Role-based access control for the API.

Access is declared in :data:`ROLE_POLICY` rather than checked ad hoc in
handlers.  Each view names the resource it serves (and optionally a
custom action); :class:`RolePolicy` maps the request method to an action
and looks up which roles may perform it.
"""
from __future__ import annotations

from rest_framework.permissions import BasePermission

RECEPTIONIST = 'receptionist'
NURSE = 'nurse'
DOCTOR = 'doctor'
ALL_ROLES = frozenset({RECEPTIONIST, NURSE, DOCTOR})

ROLE_POLICY: dict[str, dict[str, frozenset[str]]] = {
    'patients': {
        'read': ALL_ROLES,
        'create': frozenset({RECEPTIONIST}),
        'update': ALL_ROLES,
        'delete': frozenset({RECEPTIONIST}),
        'initial_checkup': frozenset({NURSE, DOCTOR}),
    },
    'checkups': {
        'read': ALL_ROLES,
        'create': frozenset({NURSE, DOCTOR}),
        'update': frozenset({NURSE, DOCTOR}),
        'delete': frozenset({DOCTOR}),
    },
    'appointments': {
        'read': ALL_ROLES,
        'create': frozenset({RECEPTIONIST}),
        'update': frozenset({RECEPTIONIST, DOCTOR}),
        'delete': frozenset({RECEPTIONIST}),
        'initial_checkup': frozenset({NURSE, DOCTOR}),
    },
    'rooms': {
        'read': ALL_ROLES,
        'create': frozenset({RECEPTIONIST}),
        'update': frozenset({RECEPTIONIST, NURSE}),
        'delete': frozenset({RECEPTIONIST}),
    },
    'announcements': {
        'read': ALL_ROLES,
        'create': ALL_ROLES,
        'update': ALL_ROLES,
        'delete': ALL_ROLES,
    },
    'users': {
        'read': ALL_ROLES,
        'update': ALL_ROLES,
        'delete': ALL_ROLES,
    },
    'ai': {
        'read': ALL_ROLES,
        'create': frozenset({DOCTOR}),
    },
}

METHOD_ACTIONS = {
    'GET': 'read',
    'HEAD': 'read',
    'OPTIONS': 'read',
    'POST': 'create',
    'PUT': 'update',
    'PATCH': 'update',
    'DELETE': 'delete',
}


def allowed_roles(resource: str, action: str) -> frozenset[str]:
    return ROLE_POLICY.get(resource, {}).get(action, frozenset())


class RolePolicy(BasePermission):
    """Grant access when the user's role is listed for (resource, action)."""
    resource: str = ''
    action: str | None = None
    message = 'Your role is not allowed to perform this action.'

    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        user = getattr(request, 'user', None)
        if not (user and user.is_authenticated):
            return False
        action = self.action or METHOD_ACTIONS.get(request.method, '')
        return getattr(user, 'role', None) in allowed_roles(self.resource, action)


def policy_for(resource: str, action: str | None = None) -> type[RolePolicy]:
    """Return a permission class bound to ``resource`` (and ``action``)."""
    name = f"RolePolicy_{resource}_{action or 'method'}"
    return type(name, (RolePolicy,), {'resource': resource, 'action': action})

