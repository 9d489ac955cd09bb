"""
Activity model - immutable chronological record of audit events.

Activity rows are append-only. No update or delete operations, neither on
instances nor through querysets.
"""

from django.db import models


IMMUTABLE_MESSAGE = "Activity log entries are append-only."


class ActivityQuerySet(models.QuerySet):
    """QuerySet that refuses bulk mutation of audit rows."""

    def update(self, **kwargs):
        raise ValueError(f"{IMMUTABLE_MESSAGE} Updates are not allowed.")

    def delete(self):
        raise ValueError(f"{IMMUTABLE_MESSAGE} Deletions are not allowed.")

    def for_subject(self, subject_type, subject_id):
        return self.filter(subject_type=subject_type, subject_id=subject_id)

    def for_causer(self, causer_type, causer_id):
        return self.filter(causer_type=causer_type, causer_id=causer_id)

    def for_session(self, session_id):
        return self.filter(properties__session_id=session_id)

    def latest_first(self):
        return self.order_by("-created_at", "-id")


class Activity(models.Model):
    """Activity model - immutable audit trail keyed by causer, subject, session."""

    log_name = models.CharField(max_length=255, null=True, blank=True)
    description = models.TextField()
    subject_type = models.CharField(max_length=100, null=True, blank=True)
    subject_id = models.BigIntegerField(null=True, blank=True)
    causer_type = models.CharField(max_length=100, null=True, blank=True)
    causer_id = models.BigIntegerField(null=True, blank=True)
    properties = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now_add=True)

    objects = ActivityQuerySet.as_manager()

    class Meta:
        db_table = "activity_log"
        indexes = [
            models.Index(fields=["log_name"], name="idx_activity_log_name"),
            models.Index(
                fields=["subject_type", "subject_id"], name="idx_activity_subject"
            ),
            models.Index(
                fields=["causer_type", "causer_id"], name="idx_activity_causer"
            ),
            models.Index(fields=["created_at"], name="idx_activity_created"),
        ]
        ordering = ["-created_at", "-id"]

    def __str__(self):
        return f"{self.log_name}: {self.description} at {self.created_at}"

    @property
    def session_id(self):
        return (self.properties or {}).get("session_id")

    def save(self, *args, **kwargs):
        """Override save to prevent updates."""
        if self.pk and Activity.objects.filter(pk=self.pk).exists():
            raise ValueError(f"{IMMUTABLE_MESSAGE} Updates are not allowed.")
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        """Override delete to prevent deletion."""
        raise ValueError(f"{IMMUTABLE_MESSAGE} Deletions are not allowed.")
