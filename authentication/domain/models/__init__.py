from .profile import Profile
from .role import UserRole
from .user import CustomUser

__all__ = [
    "CustomUser",
    "Profile",
    "UserRole",
]
