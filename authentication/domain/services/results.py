"""
Result objects for the authentication services.

Carried as the value of a successful ServiceResult instead of loose dicts.
"""

from dataclasses import dataclass
from typing import Any, Optional

from infrastructure.repositories import ProfileRecord


@dataclass
class SessionTokens:
    """JWT pair issued at sign-up / sign-in."""

    access: str
    refresh: str


@dataclass
class AuthResult:
    """Result of a successful sign-up or sign-in."""

    user: Any  # CustomUser instance
    tokens: SessionTokens
    profile: Optional[ProfileRecord] = None
    is_admin: bool = False
    created_college: bool = False


@dataclass
class SessionInfo:
    """The acting user as seen by the client."""

    user_id: str
    email: str
    profile: Optional[ProfileRecord] = None
    is_admin: bool = False
