from .auth_serializers import SignInSerializer, SignOutSerializer, SignUpSerializer, UserSerializer
from .profile_serializers import ProfileSerializer, ProfileUpdateSerializer, RoleUpdateSerializer, UserAccountSerializer


__all__ = [
    "UserSerializer",
    "SignUpSerializer",
    "SignInSerializer",
    "SignOutSerializer",
    "ProfileSerializer",
    "ProfileUpdateSerializer",
    "UserAccountSerializer",
    "RoleUpdateSerializer",
]
