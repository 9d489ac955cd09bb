"""
Audit log views - query activity entries.

Read-only - activities are append-only. Super-admin only.
"""

from django.conf import settings
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from rest_framework.utils.urls import remove_query_param, replace_query_param
from core.permissions import IsAuthenticatedUser, authorize, can_view_audit_logs
from apps.audit import services
from apps.audit.serializers import ActivitySerializer, ResolvedActivitySerializer


def _authorize_audit_access(request):
    authorize(
        can_view_audit_logs(request.user),
        "Only super-admins can view audit logs",
    )


def _page_link(url, page_number):
    if page_number is None:
        return None
    if page_number == 1:
        return remove_query_param(url, "page")
    return replace_query_param(url, "page", page_number)


def _paginated_response(request, queryset, **extra):
    """Paginate activities; links keep every other query parameter."""
    page_size = services.parse_page_size(
        request.query_params.get("per_page"),
        default=getattr(settings, "AUDIT_LOG_PAGE_SIZE", services.DEFAULT_PAGE_SIZE),
    )
    page = services.query_page(
        queryset,
        page_size=page_size,
        page=request.query_params.get("page") or 1,
    )
    url = request.build_absolute_uri()
    serializer = ActivitySerializer(
        page.items, many=True, context={"causers": services.resolve_causers(page.items)}
    )
    return Response(
        {
            "count": page.count,
            "page": page.number,
            "perPage": page.page_size,
            "next": _page_link(url, page.next_page),
            "previous": _page_link(url, page.previous_page),
            "results": serializer.data,
            **extra,
        },
        status=status.HTTP_200_OK,
    )


@api_view(["GET"])
@permission_classes([IsAuthenticatedUser])
def list_audit_logs(request):
    """
    GET /api/v1/audit-logs/

    All activities with optional filters: search, log_name, causer_id,
    date_from, date_to, session_id.
    """
    _authorize_audit_access(request)
    filters = services.ActivityFilters.from_query_params(request.query_params)
    return _paginated_response(
        request,
        services.list_all(filters),
        logNames=services.log_names(),
        filters=filters.as_dict(),
    )


@api_view(["GET"])
@permission_classes([IsAuthenticatedUser])
def list_user_activities(request, userId):
    """GET /api/v1/audit-logs/user/{userId} - activities caused by a user."""
    _authorize_audit_access(request)
    return _paginated_response(
        request, services.list_for_causer(userId), userId=userId
    )


@api_view(["GET"])
@permission_classes([IsAuthenticatedUser])
def list_ip_address_history(request, ipAddressId):
    """GET /api/v1/audit-logs/ip-address/{ipAddressId} - history of one record."""
    _authorize_audit_access(request)
    return _paginated_response(
        request, services.list_for_subject(ipAddressId), ipAddressId=ipAddressId
    )


@api_view(["GET"])
@permission_classes([IsAuthenticatedUser])
def list_session_activities(request, sessionId):
    """GET /api/v1/audit-logs/session/{sessionId} - activities of one login."""
    _authorize_audit_access(request)
    return _paginated_response(
        request, services.list_for_session(sessionId), sessionId=sessionId
    )


@api_view(["GET"])
@permission_classes([IsAuthenticatedUser])
def get_audit_log(request, activityId):
    """GET /api/v1/audit-logs/{activityId} - single activity with references."""
    _authorize_audit_access(request)
    resolved = services.get_one(activityId)
    return Response(
        {"data": ResolvedActivitySerializer(resolved).data}, status=status.HTTP_200_OK
    )
