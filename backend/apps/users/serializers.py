"""
Serializers for User model.

No business logic in serializers - validation only.
"""

from rest_framework import serializers
from apps.users.models import User, Role


class UserSerializer(serializers.ModelSerializer):
    """Serializer for User model."""

    role = serializers.ChoiceField(choices=Role.choices, read_only=True)
    isSuperAdmin = serializers.BooleanField(source="is_super_admin", read_only=True)

    class Meta:
        model = User
        fields = ["id", "name", "email", "role", "isSuperAdmin"]
        read_only_fields = ["id", "role"]


class UserSummarySerializer(serializers.ModelSerializer):
    """Owner / causer reference embedded in other payloads."""

    class Meta:
        model = User
        fields = ["id", "name", "email"]


class UserCreateSerializer(serializers.Serializer):
    """Serializer for user creation and registration."""

    email = serializers.EmailField(max_length=255, required=True)
    password = serializers.CharField(write_only=True, required=True, min_length=8)
    name = serializers.CharField(max_length=255, required=True)
    role = serializers.ChoiceField(choices=Role.choices, default=Role.USER)

    def validate_email(self, value):
        if User.objects.filter(email__iexact=value).exists():
            raise serializers.ValidationError("The email has already been taken.")
        return value

    def validate_role(self, value):
        """Super-admins cannot be created through the API."""
        if value == Role.SUPER_ADMIN:
            raise serializers.ValidationError("Cannot create super-admin users via API")
        return value
