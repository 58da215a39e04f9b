from .admin_views import AdminUserListView, AdminUserRoleView
from .auth_views import LoginAPIView, LogoutAPIView, RegisterAPIView, SessionView
from .profile_views import ProfileView


__all__ = [
    "LoginAPIView",
    "RegisterAPIView",
    "LogoutAPIView",
    "SessionView",
    "ProfileView",
    "AdminUserListView",
    "AdminUserRoleView",
]
