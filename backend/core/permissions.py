"""
Role-based access control.

Policy predicates are pure functions over (actor, resource). Role is read
from the authenticated user only, never from the request body, query
parameters, or headers.
"""

from rest_framework import permissions

from core.exceptions import PermissionDeniedError


def is_super_admin(actor):
    if actor is None or not getattr(actor, "is_authenticated", False):
        return False
    return bool(getattr(actor, "is_super_admin", False))


def can_view_ip_address(actor, record):
    """All authenticated actors may view all records."""
    return True


def can_create_ip_address(actor):
    return True


def can_update_ip_address(actor, record):
    return is_super_admin(actor) or (actor is not None and record.user_id == actor.pk)


def can_delete_ip_address(actor, record):
    return is_super_admin(actor)


def can_view_audit_logs(actor):
    return is_super_admin(actor)


def authorize(allowed, message="You do not have permission to perform this action"):
    """Raise PermissionDeniedError unless the policy check passed."""
    if not allowed:
        raise PermissionDeniedError(message)


class IsAuthenticatedUser(permissions.BasePermission):
    """Allow any authenticated user with a valid role."""

    def has_permission(self, request, view):
        if not request.user or not request.user.is_authenticated:
            return False

        if not hasattr(request.user, "role"):
            return False

        return True


class IsSuperAdmin(permissions.BasePermission):
    """Allow super-admin role only."""

    message = "Only super-admins can perform this action"

    def has_permission(self, request, view):
        if not IsAuthenticatedUser().has_permission(request, view):
            return False

        return is_super_admin(request.user)
