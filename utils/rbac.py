import logging

# Canonical role names
ROLE_USER = "user"
ROLE_ADMIN = "admin"

logger = logging.getLogger(__name__)


def _persisted_roles(user) -> set:
    """Load the user's role rows from the DB.

    Returns an empty set if the user is not authenticated or lookup fails.
    """
    from authentication.models import UserRole

    if not getattr(user, "is_authenticated", False):
        return set()
    try:
        return set(UserRole.objects.filter(user_id=getattr(user, "pk", None)).values_list("role", flat=True))
    except Exception as e:
        logger.warning("RBAC role lookup failed for user_id=%s: %s", getattr(user, "pk", None), e)
        return set()


def is_admin(user) -> bool:
    """Admin check verified against user_roles; superusers always pass."""
    if getattr(user, "is_superuser", False) and getattr(user, "is_authenticated", False):
        return True
    return ROLE_ADMIN in _persisted_roles(user)
