"""
Serializers for Activity model.
"""

from rest_framework import serializers
from apps.audit import references
from apps.audit.models import Activity


class ActivitySerializer(serializers.ModelSerializer):
    """
    Serializer for Activity.

    Pass ``causers`` ({user_id: user}) in the context to embed causer
    name and email without a query per row.
    """

    logName = serializers.CharField(source="log_name", read_only=True, allow_null=True)
    subjectType = serializers.CharField(
        source="subject_type", read_only=True, allow_null=True
    )
    subjectId = serializers.IntegerField(
        source="subject_id", read_only=True, allow_null=True
    )
    causerType = serializers.CharField(
        source="causer_type", read_only=True, allow_null=True
    )
    causerId = serializers.IntegerField(
        source="causer_id", read_only=True, allow_null=True
    )
    sessionId = serializers.CharField(source="session_id", read_only=True, allow_null=True)
    causer = serializers.SerializerMethodField()
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = Activity
        fields = [
            "id",
            "logName",
            "description",
            "subjectType",
            "subjectId",
            "causerType",
            "causerId",
            "causer",
            "properties",
            "sessionId",
            "createdAt",
        ]

    def get_causer(self, obj):
        if obj.causer_type != references.USER:
            return None
        user = self.context.get("causers", {}).get(obj.causer_id)
        return references.to_dict(references.USER, user)


class ResolvedActivitySerializer(serializers.Serializer):
    """Single activity with causer and subject resolved."""

    def to_representation(self, instance):
        data = ActivitySerializer(instance.activity).data
        activity = instance.activity
        data["causer"] = (
            references.to_dict(activity.causer_type, instance.causer)
            if instance.causer is not None
            else None
        )
        data["subject"] = (
            references.to_dict(activity.subject_type, instance.subject)
            if instance.subject is not None
            else None
        )
        return data
