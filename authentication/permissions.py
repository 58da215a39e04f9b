from __future__ import annotations

from typing import Iterable, Set

from rest_framework.permissions import BasePermission

from utils.rbac import ROLE_ADMIN, ROLE_USER, is_admin


def build_role_set(user) -> Set[str]:
    """Compute the full role set for the given user instance."""
    cached = getattr(user, "_cached_role_set", None)
    if cached is not None:
        return cached

    roles: Set[str] = set()
    if not getattr(user, "is_authenticated", False):
        return roles

    roles.add(ROLE_USER)

    # Re-validated against user_roles, never taken from JWT claims
    if is_admin(user):
        roles.add(ROLE_ADMIN)

    setattr(user, "_cached_role_set", roles)
    return roles


def user_has_role(user, *required: str) -> bool:
    roles = build_role_set(user)
    return any(role in roles for role in required)


class RoleRequired(BasePermission):
    """Base permission that enforces required roles after DB re-validation."""

    required_roles: Iterable[str] = ()

    def has_permission(self, request, view) -> bool:
        user = getattr(request, "user", None)
        if user is None or not getattr(user, "is_authenticated", False):
            return False

        required = tuple(self.required_roles)
        if not required:
            return True
        return user_has_role(user, *required)

    def has_object_permission(self, request, view, obj) -> bool:
        return self.has_permission(request, view)


class AdminRequired(RoleRequired):
    required_roles = (ROLE_ADMIN,)
