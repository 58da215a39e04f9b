from rest_framework import serializers

from authentication.domain.models import CustomUser


class UserSerializer(serializers.ModelSerializer):
    class Meta:
        model = CustomUser
        fields = ("id", "email", "date_joined")
        read_only_fields = fields


class SignUpSerializer(serializers.Serializer):
    """
    Request body for sign-up.

    The college is either picked (``college_id``) or typed in
    (``new_college``) and created if it does not exist yet.
    """

    email = serializers.EmailField(max_length=150)
    password = serializers.CharField(write_only=True, style={"input_type": "password"})
    full_name = serializers.CharField(max_length=150)
    mobile_number = serializers.CharField(max_length=20)
    college_id = serializers.UUIDField(required=False, allow_null=True)
    new_college = serializers.CharField(required=False, allow_blank=True, max_length=100)

    def validate(self, attrs):
        if not attrs.get("college_id") and not (attrs.get("new_college") or "").strip():
            raise serializers.ValidationError({"college_id": "Please select or add a college."})
        return attrs


class SignInSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, style={"input_type": "password"})


class SignOutSerializer(serializers.Serializer):
    refresh = serializers.CharField(help_text="Refresh token to revoke")
