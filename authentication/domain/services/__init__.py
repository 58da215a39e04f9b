"""
Business logic services for authentication.

Services encapsulate business rules and coordinate between
repositories and the auth backend.
"""

from .auth_service import AuthService
from .profile_service import ProfileService
from .results import AuthResult, SessionInfo, SessionTokens
from .role_service import RoleService


__all__ = [
    "AuthService",
    "ProfileService",
    "RoleService",
    "AuthResult",
    "SessionInfo",
    "SessionTokens",
]
