"""
IP address services - all mutations flow through this layer.

Rules:
- All mutations wrapped in transaction.atomic
- Use select_for_update for row-level locking
- Authorize through core.permissions before changing anything
- Exactly one activity per successful mutation; none for no-op updates
- No direct model.save() from views
"""

import logging
from collections.abc import Mapping

from django.core.exceptions import ValidationError as DjangoValidationError
from django.core.validators import validate_ipv46_address
from django.db import transaction
from django.db.models import Q

from core.exceptions import NotFoundError, PermissionDeniedError, ValidationError
from core.permissions import (
    authorize,
    can_create_ip_address,
    can_delete_ip_address,
    can_update_ip_address,
    can_view_ip_address,
)
from apps.audit import services as audit_services
from apps.ip_addresses.models import IpAddress

logger = logging.getLogger(__name__)

CREATABLE_FIELDS = ("ip_address", "label", "comment")
UPDATABLE_FIELDS = ("label", "comment")

IP_ADDRESS_MAX_LENGTH = 45
LABEL_MAX_LENGTH = 255
COMMENT_MAX_LENGTH = 1000

CREATED = "IP address has been created"
UPDATED = "IP address has been updated"
DELETED = "IP address has been deleted"

_REQUIRED_MESSAGES = {
    "ip_address": "Please provide an IP address.",
    "label": "Please provide a label for this IP address.",
}


def _clean(data, fields, required=()):
    """
    Validate the subset of ``fields`` present in ``data``.

    Returns:
        dict: Cleaned values for the fields that were supplied

    Raises:
        ValidationError: With a field-keyed error map
    """
    if not isinstance(data, Mapping):
        raise ValidationError(
            "The given data was invalid.", {"non_field_errors": ["Expected an object."]}
        )

    errors = {}
    cleaned = {}

    for name in required:
        value = data.get(name)
        if value is None or (isinstance(value, str) and not value.strip()):
            errors[name] = [_REQUIRED_MESSAGES[name]]

    for name in fields:
        if name not in data or name in errors:
            continue
        value = data.get(name)
        if value is not None and not isinstance(value, str):
            errors[name] = [f"The {name.replace('_', ' ')} field must be a string."]
            continue
        value = value.strip() if value is not None else None

        if name == "ip_address":
            if len(value) > IP_ADDRESS_MAX_LENGTH:
                errors[name] = [
                    f"The ip address field must not be greater than "
                    f"{IP_ADDRESS_MAX_LENGTH} characters."
                ]
                continue
            try:
                validate_ipv46_address(value)
            except DjangoValidationError:
                errors[name] = ["Please provide a valid IPv4 or IPv6 address."]
                continue
        elif name == "label":
            if not value:
                errors[name] = [_REQUIRED_MESSAGES["label"]]
                continue
            if len(value) > LABEL_MAX_LENGTH:
                errors[name] = [
                    f"The label field must not be greater than {LABEL_MAX_LENGTH} "
                    f"characters."
                ]
                continue
        elif name == "comment":
            # Empty comments are stored as null
            value = value or None
            if value is not None and len(value) > COMMENT_MAX_LENGTH:
                errors[name] = [
                    f"The comment field must not be greater than "
                    f"{COMMENT_MAX_LENGTH} characters."
                ]
                continue

        cleaned[name] = value

    if errors:
        raise ValidationError("The given data was invalid.", errors)
    return cleaned


def _log_mutation(message, operation, context, record_id, **extra):
    logger.info(
        message,
        extra={
            "operation": operation,
            "entity_id": str(record_id),
            "actor_id": str(context.actor_id),
            "request_id": context.request_id,
            **extra,
        },
    )


def _require_actor(context):
    if context is None or context.actor is None:
        raise PermissionDeniedError("Authentication required")


def _get_for_update(ip_address_id):
    try:
        return IpAddress.objects.select_for_update().get(id=ip_address_id)
    except IpAddress.DoesNotExist:
        raise NotFoundError(f"IP address {ip_address_id} does not exist")


def create_ip_address(context, data):
    """
    Create an IP address record owned by the acting user.

    Args:
        context: RequestContext of the acting user
        data: Mapping with ip_address, label and optional comment

    Returns:
        IpAddress: Created record

    Raises:
        PermissionDeniedError: If there is no acting user
        ValidationError: If ip_address, label or comment are invalid
        PersistenceError: If the paired activity could not be written (strict mode)
    """
    _require_actor(context)
    authorize(can_create_ip_address(context.actor))
    cleaned = _clean(data, CREATABLE_FIELDS, required=("ip_address", "label"))

    with transaction.atomic():
        record = IpAddress.objects.create(user=context.actor, **cleaned)

        audit_services.append_activity(
            context,
            CREATED,
            subject=record,
            properties={"attributes": record.logged_values()},
        )

    _log_mutation("ip_address_created", "CREATE_IP_ADDRESS", context, record.id)
    return record


def update_ip_address(context, ip_address_id, data):
    """
    Update label and/or comment of a record.

    Only fields whose value actually changes are written and logged. When
    nothing changes no activity is appended.

    Raises:
        NotFoundError: If the record does not exist
        PermissionDeniedError: If the actor is neither owner nor super-admin
        ValidationError: If label or comment are invalid
    """
    _require_actor(context)

    with transaction.atomic():
        record = _get_for_update(ip_address_id)
        authorize(
            can_update_ip_address(context.actor, record),
            "You can only update your own IP addresses",
        )
        cleaned = _clean(data, UPDATABLE_FIELDS)

        old, new = {}, {}
        for name, value in cleaned.items():
            current = getattr(record, name)
            if current != value:
                old[name] = current
                new[name] = value
                setattr(record, name, value)

        if not new:
            return record

        record.save(update_fields=[*new, "updated_at"])

        audit_services.append_activity(
            context,
            UPDATED,
            subject=record,
            properties={"attributes": new, "old": old},
        )

    _log_mutation(
        "ip_address_updated",
        "UPDATE_IP_ADDRESS",
        context,
        record.id,
        changed_fields=sorted(new),
    )
    return record


def delete_ip_address(context, ip_address_id):
    """
    Delete a record. Super-admin only.

    Raises:
        NotFoundError: If the record does not exist
        PermissionDeniedError: If the actor is not a super-admin
    """
    _require_actor(context)

    with transaction.atomic():
        record = _get_for_update(ip_address_id)
        authorize(
            can_delete_ip_address(context.actor, record),
            "Only super-admins can delete IP addresses",
        )

        # Logged before the row goes away so the subject id is still known
        audit_services.append_activity(
            context,
            DELETED,
            subject=record,
            properties={"old": record.logged_values()},
        )
        record.delete()

    _log_mutation("ip_address_deleted", "DELETE_IP_ADDRESS", context, ip_address_id)
    return True


def get_ip_address(actor, ip_address_id):
    try:
        record = IpAddress.objects.select_related("user").get(id=ip_address_id)
    except IpAddress.DoesNotExist:
        raise NotFoundError(f"IP address {ip_address_id} does not exist")
    authorize(can_view_ip_address(actor, record))
    return record


def list_ip_addresses(search=None):
    """All records, newest first, optionally matching ip_address or label."""
    queryset = IpAddress.objects.select_related("user")
    if search:
        queryset = queryset.filter(
            Q(ip_address__icontains=search) | Q(label__icontains=search)
        )
    return queryset.order_by("-created_at", "-id")


def get_ip_address_history(record, limit=50):
    """Most recent activities about ``record``."""
    return list(audit_services.list_for_subject(record.pk)[:limit])
