"""
IpAddress model - labeled IPv4/IPv6 address records owned by a user.
"""

from django.conf import settings
from django.db import models


class IpAddress(models.Model):
    """IP address record. Owner is the creating user."""

    ip_address = models.CharField(max_length=45)
    label = models.CharField(max_length=255)
    comment = models.TextField(max_length=1000, null=True, blank=True)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="ip_addresses",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    # Fields copied into activity properties
    LOGGED_FIELDS = ("ip_address", "label", "comment")

    class Meta:
        db_table = "ip_addresses"
        indexes = [
            models.Index(fields=["ip_address"], name="idx_ip_address"),
        ]
        ordering = ["-created_at", "-id"]

    def __str__(self):
        return f"{self.ip_address} ({self.label})"

    def logged_values(self):
        return {name: getattr(self, name) for name in self.LOGGED_FIELDS}
