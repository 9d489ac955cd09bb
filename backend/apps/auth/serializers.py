"""
Serializers for authentication endpoints.
"""

from rest_framework import serializers


class LoginSerializer(serializers.Serializer):
    """Serializer for login request."""

    email = serializers.EmailField(required=True)
    password = serializers.CharField(required=True, write_only=True)
    device_name = serializers.CharField(
        required=False, allow_blank=True, allow_null=True, max_length=255
    )


class LogoutSerializer(serializers.Serializer):
    """Serializer for API logout request."""

    refresh_token = serializers.CharField(required=False, allow_blank=True)
    revoke_all = serializers.BooleanField(required=False, default=False)


class RefreshSerializer(serializers.Serializer):
    """Serializer for token refresh request."""

    refresh_token = serializers.CharField(required=True)
    device_name = serializers.CharField(
        required=False, allow_blank=True, allow_null=True, max_length=255
    )
