"""
Serializers for IpAddress model.

Output shaping only - input validation lives in apps.ip_addresses.services.
"""

from rest_framework import serializers
from apps.ip_addresses.models import IpAddress
from apps.users.serializers import UserSummarySerializer


class IpAddressSerializer(serializers.ModelSerializer):
    """Serializer for IpAddress with its owner."""

    user = UserSummarySerializer(read_only=True)

    class Meta:
        model = IpAddress
        fields = [
            "id",
            "ip_address",
            "label",
            "comment",
            "user_id",
            "user",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
