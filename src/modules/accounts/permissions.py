"""DRF permission classes keyed on the staff ``Role``."""

from __future__ import annotations

from rest_framework.permissions import BasePermission

from modules.accounts.constants import Role, parse_role
from modules.accounts.exceptions import InvalidRole


def role_of(user) -> Role | None:
    """Return the authenticated user's ``Role``, ``None`` when it has none."""
    role = getattr(user, "role", None)
    if not role:
        return None
    try:
        return parse_role(role)
    except InvalidRole:
        return None


class IsAdminRole(BasePermission):
    message = "Only administrators can perform this action."

    def has_permission(self, request, view) -> bool:
        user = request.user
        return bool(
            user and user.is_authenticated and role_of(user) is Role.ADMIN
        )


class HasStaffRole(BasePermission):
    """Authenticated and holding one of the known roles."""

    message = "Your account has no production role assigned."

    def has_permission(self, request, view) -> bool:
        user = request.user
        return bool(user and user.is_authenticated and role_of(user) is not None)
