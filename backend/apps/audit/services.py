"""
Audit service - appends immutable activity entries and queries them.

All entries are append-only. No updates or deletions.

Append failures follow settings.AUDIT_STRICT_WRITES:
- strict (default): the append runs inside the caller's transaction and a
  database error is raised as PersistenceError, rolling back the mutation
- best-effort: the append runs in its own savepoint and a database error
  is logged; the paired mutation is kept
"""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, List, Optional

from django.conf import settings
from django.core.paginator import EmptyPage, PageNotAnInteger, Paginator
from django.db import DatabaseError, transaction
from django.db.models import Q
from django.utils.dateparse import parse_date

from core.exceptions import NotFoundError, PersistenceError, ValidationError
from apps.audit import references
from apps.audit.models import Activity

logger = logging.getLogger(__name__)

DEFAULT_LOG_NAME = "default"
AUTH_LOG_NAME = "authentication"
DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


# -----------------------------
# Store
# -----------------------------


def append_activity(
    context,
    description,
    log_name=DEFAULT_LOG_NAME,
    subject=None,
    causer=None,
    properties=None,
):
    """
    Append an activity entry.

    Args:
        context: RequestContext of the triggering request (None for system events)
        description: Human-readable summary, e.g. 'IP address has been created'
        log_name: Category used as a coarse partition
        subject: Model instance the event is about (optional)
        causer: Actor credited with the event; defaults to context.actor
        properties: Extra properties merged over the request properties

    Returns:
        Activity: Created entry, or None when a best-effort write failed

    Raises:
        PersistenceError: If the write failed in strict mode
    """
    if causer is None and context is not None:
        causer = context.actor

    subject_ref = references.reference_for(subject)
    causer_ref = references.reference_for(causer)

    merged = dict(context.client_properties()) if context is not None else {}
    merged.update(properties or {})

    fields = {
        "log_name": log_name,
        "description": description,
        "subject_type": subject_ref.type if subject_ref else None,
        "subject_id": subject_ref.id if subject_ref else None,
        "causer_type": causer_ref.type if causer_ref else None,
        "causer_id": causer_ref.id if causer_ref else None,
        "properties": merged,
    }
    log_extra = {
        "operation": "APPEND_ACTIVITY",
        "log_name": log_name,
        "subject_type": fields["subject_type"],
        "entity_id": str(fields["subject_id"]) if subject_ref else None,
        "request_id": getattr(context, "request_id", None),
    }

    if getattr(settings, "AUDIT_STRICT_WRITES", True):
        try:
            activity = Activity.objects.create(**fields)
        except DatabaseError as exc:
            raise PersistenceError(
                "Audit event could not be persisted",
                details={"description": description},
            ) from exc
    else:
        try:
            with transaction.atomic():
                activity = Activity.objects.create(**fields)
        except DatabaseError:
            logger.exception("activity_append_failed", extra=log_extra)
            return None

    logger.debug(description, extra=log_extra)
    return activity


def get_activity(activity_id):
    """Fetch one entry or raise NotFoundError."""
    try:
        return Activity.objects.get(pk=activity_id)
    except (Activity.DoesNotExist, ValueError, TypeError):
        raise NotFoundError(f"Activity {activity_id} does not exist")


@dataclass
class ActivityPage:
    items: List[Activity]
    number: int
    page_size: int
    count: int
    next_page: Optional[int] = None
    previous_page: Optional[int] = None


def parse_page_size(value, default=DEFAULT_PAGE_SIZE):
    if value in (None, ""):
        return default
    try:
        page_size = int(value)
    except (TypeError, ValueError):
        raise ValidationError("Invalid page size", {"per_page": ["Must be an integer."]})
    if page_size < 1:
        raise ValidationError("Invalid page size", {"per_page": ["Must be at least 1."]})
    return min(page_size, MAX_PAGE_SIZE)


def query_page(queryset, page_size=DEFAULT_PAGE_SIZE, page=1):
    """
    Return one page of ``queryset`` ordered most recent first.

    Ties on created_at are broken by descending id.
    """
    paginator = Paginator(queryset.latest_first(), page_size)
    try:
        current = paginator.page(page or 1)
    except PageNotAnInteger:
        raise ValidationError("Invalid page", {"page": ["Must be an integer."]})
    except EmptyPage:
        return ActivityPage(
            items=[],
            number=int(page),
            page_size=page_size,
            count=paginator.count,
            previous_page=paginator.num_pages if int(page) > 1 else None,
        )

    return ActivityPage(
        items=list(current.object_list),
        number=current.number,
        page_size=page_size,
        count=paginator.count,
        next_page=current.next_page_number() if current.has_next() else None,
        previous_page=(
            current.previous_page_number() if current.has_previous() else None
        ),
    )


# -----------------------------
# Queries
# -----------------------------


@dataclass(frozen=True)
class ActivityFilters:
    """Supported filters of the global activity listing."""

    search: Optional[str] = None
    log_name: Optional[str] = None
    causer_id: Optional[int] = None
    date_from: Optional[date] = None
    date_to: Optional[date] = None
    session_id: Optional[str] = None

    @classmethod
    def from_query_params(cls, params):
        errors = {}

        causer_id = params.get("causer_id") or None
        if causer_id is not None:
            try:
                causer_id = int(causer_id)
            except ValueError:
                errors["causer_id"] = ["Must be an integer."]

        dates = {}
        for name in ("date_from", "date_to"):
            raw = params.get(name) or None
            if raw is None:
                dates[name] = None
                continue
            try:
                parsed = parse_date(raw)
            except ValueError:
                parsed = None
            if parsed is None:
                errors[name] = ["Must be a date in YYYY-MM-DD format."]
            dates[name] = parsed

        if errors:
            raise ValidationError("Invalid audit log filters", errors)

        return cls(
            search=(params.get("search") or "").strip() or None,
            log_name=params.get("log_name") or None,
            causer_id=causer_id,
            date_from=dates["date_from"],
            date_to=dates["date_to"],
            session_id=params.get("session_id") or None,
        )

    def as_dict(self):
        return {
            "search": self.search,
            "log_name": self.log_name,
            "causer_id": self.causer_id,
            "date_from": self.date_from.isoformat() if self.date_from else None,
            "date_to": self.date_to.isoformat() if self.date_to else None,
            "session_id": self.session_id,
        }


def list_all(filters=None):
    """All activities matching ``filters``; predicates combine with AND."""
    from apps.users.models import User

    filters = filters or ActivityFilters()
    queryset = Activity.objects.all()

    if filters.search:
        matching_users = User.objects.filter(
            Q(name__icontains=filters.search) | Q(email__icontains=filters.search)
        ).values("id")
        queryset = queryset.filter(
            Q(description__icontains=filters.search)
            | Q(log_name__icontains=filters.search)
            | Q(causer_type=references.USER, causer_id__in=matching_users)
        )

    if filters.log_name:
        queryset = queryset.filter(log_name=filters.log_name)

    if filters.causer_id is not None:
        queryset = queryset.filter(causer_id=filters.causer_id)

    if filters.date_from:
        queryset = queryset.filter(created_at__date__gte=filters.date_from)

    if filters.date_to:
        queryset = queryset.filter(created_at__date__lte=filters.date_to)

    if filters.session_id:
        queryset = queryset.for_session(filters.session_id)

    return queryset.latest_first()


def log_names():
    """Distinct, non-empty log names for filter population."""
    return list(
        Activity.objects.exclude(log_name__isnull=True)
        .exclude(log_name="")
        .order_by("log_name")
        .values_list("log_name", flat=True)
        .distinct()
    )


def list_for_subject(subject_id, subject_type=references.IP_ADDRESS):
    return Activity.objects.for_subject(subject_type, subject_id).latest_first()


def list_for_causer(causer_id, causer_type=references.USER):
    return Activity.objects.for_causer(causer_type, causer_id).latest_first()


def list_for_session(session_id):
    return Activity.objects.for_session(session_id).latest_first()


@dataclass
class ResolvedActivity:
    activity: Activity
    causer: Any = None
    subject: Any = None


def get_one(activity_id):
    """Single entry with causer and subject resolved (None if deleted)."""
    activity = get_activity(activity_id)
    return ResolvedActivity(
        activity=activity,
        causer=references.resolve(activity.causer_type, activity.causer_id),
        subject=references.resolve(activity.subject_type, activity.subject_id),
    )


def resolve_causers(activities):
    """Bulk-load User causers for a page: ``{user_id: user}``."""
    return references.resolve_many(
        references.USER,
        [a.causer_id for a in activities if a.causer_type == references.USER],
    )
