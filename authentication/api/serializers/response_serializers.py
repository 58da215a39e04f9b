"""
Response Serializers for API Documentation

These serializers define the structure of API responses for OpenAPI schema generation.
They are NOT used for data validation, only for documentation in Swagger/ReDoc.
"""

from rest_framework import serializers

from .auth_serializers import UserSerializer
from .profile_serializers import ProfileSerializer


# ===== Authentication Response Serializers =====


class AuthResponseSerializer(serializers.Serializer):
    """Response for successful sign-up / sign-in"""

    access = serializers.CharField(help_text="JWT access token")
    refresh = serializers.CharField(help_text="JWT refresh token")
    user = UserSerializer(help_text="User details")
    profile = ProfileSerializer(allow_null=True, help_text="Profile, if one exists")
    is_admin = serializers.BooleanField()


class SessionResponseSerializer(serializers.Serializer):
    """The signed-in user"""

    user_id = serializers.CharField()
    email = serializers.EmailField()
    profile = ProfileSerializer(allow_null=True)
    is_admin = serializers.BooleanField()


class MessageResponseSerializer(serializers.Serializer):
    message = serializers.CharField()
