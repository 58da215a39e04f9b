from django.urls import path
from rest_framework_simplejwt.views import TokenRefreshView

from authentication.api.views import (
    AdminUserListView,
    AdminUserRoleView,
    LoginAPIView,
    LogoutAPIView,
    ProfileView,
    RegisterAPIView,
    SessionView,
)


urlpatterns = [
    # Auth
    path("register/", RegisterAPIView.as_view(), name="register"),
    path("login/", LoginAPIView.as_view(), name="login"),
    path("logout/", LogoutAPIView.as_view(), name="logout"),
    path("token/refresh/", TokenRefreshView.as_view(), name="token_refresh"),
    path("session/", SessionView.as_view(), name="session"),
    # Profile
    path("profile/", ProfileView.as_view(), name="profile"),
    # Admin
    path("admin/users/", AdminUserListView.as_view(), name="admin_users"),
    path("admin/users/<uuid:user_id>/role/", AdminUserRoleView.as_view(), name="admin_user_role"),
]
