from rest_framework import serializers

from utils.rbac import ROLE_ADMIN, ROLE_USER


class ProfileSerializer(serializers.Serializer):
    """Profile payload built from a ProfileRecord"""

    id = serializers.CharField()
    email = serializers.EmailField()
    full_name = serializers.CharField()
    mobile_number = serializers.CharField()
    college = serializers.CharField()
    created_at = serializers.DateTimeField(allow_null=True)


class ProfileUpdateSerializer(serializers.Serializer):
    """Partial update of the caller's own profile"""

    full_name = serializers.CharField(required=False, max_length=150)
    mobile_number = serializers.CharField(required=False, max_length=20)
    college_id = serializers.UUIDField(required=False, allow_null=True)
    new_college = serializers.CharField(required=False, allow_blank=True, max_length=100)


class UserAccountSerializer(serializers.Serializer):
    """A user as listed in the admin panel"""

    profile = ProfileSerializer()
    roles = serializers.ListField(child=serializers.CharField())
    is_admin = serializers.BooleanField()


class RoleUpdateSerializer(serializers.Serializer):
    role = serializers.ChoiceField(choices=[ROLE_ADMIN, ROLE_USER])
