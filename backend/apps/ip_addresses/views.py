"""
IP address API views.

All mutations flow through the service layer.
All authenticated users may list, view and create records; update and
delete are authorized per record by the service layer.
"""

import logging

from django.conf import settings
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response

from core.permissions import IsAuthenticatedUser
from apps.audit import services as audit_services
from apps.audit.context import RequestContext
from apps.audit.serializers import ActivitySerializer
from apps.ip_addresses import services
from apps.ip_addresses.serializers import IpAddressSerializer

logger = logging.getLogger(__name__)


class IpAddressPagination(PageNumberPagination):
    page_size_query_param = "per_page"
    max_page_size = 100

    def __init__(self):
        self.page_size = getattr(settings, "IP_ADDRESS_PAGE_SIZE", 10)


@api_view(["GET", "POST"])
@permission_classes([IsAuthenticatedUser])
def list_or_create_ip_addresses(request):
    """
    GET /api/v1/ip-addresses - List IP addresses (search by address or label)
    POST /api/v1/ip-addresses - Create an IP address owned by the caller
    """
    if request.method == "GET":
        search = (request.query_params.get("search") or "").strip() or None
        paginator = IpAddressPagination()
        page = paginator.paginate_queryset(
            services.list_ip_addresses(search=search), request
        )
        serializer = IpAddressSerializer(page, many=True)
        return paginator.get_paginated_response(serializer.data)

    context = RequestContext.from_request(request)
    record = services.create_ip_address(context, request.data)
    return Response(
        {
            "message": "IP address created successfully.",
            "data": IpAddressSerializer(record).data,
        },
        status=status.HTTP_201_CREATED,
    )


@api_view(["GET", "PUT", "PATCH", "DELETE"])
@permission_classes([IsAuthenticatedUser])
def get_update_or_delete_ip_address(request, ipAddressId):
    """
    GET /api/v1/ip-addresses/{id} - Record with its latest activities
    PUT/PATCH /api/v1/ip-addresses/{id} - Update label/comment (owner or super-admin)
    DELETE /api/v1/ip-addresses/{id} - Delete (super-admin only)
    """
    if request.method == "GET":
        record = services.get_ip_address(request.user, ipAddressId)
        activities = services.get_ip_address_history(record)
        return Response(
            {
                "data": {
                    "ipAddress": IpAddressSerializer(record).data,
                    "activities": ActivitySerializer(
                        activities,
                        many=True,
                        context={"causers": audit_services.resolve_causers(activities)},
                    ).data,
                }
            },
            status=status.HTTP_200_OK,
        )

    context = RequestContext.from_request(request)

    if request.method == "DELETE":
        services.delete_ip_address(context, ipAddressId)
        return Response(
            {"message": "IP address deleted successfully."}, status=status.HTTP_200_OK
        )

    logger.debug("update_ip_address invoked", extra={"ipAddressId": str(ipAddressId)})
    record = services.update_ip_address(context, ipAddressId, request.data)
    return Response(
        {
            "message": "IP address updated successfully.",
            "data": IpAddressSerializer(record).data,
        },
        status=status.HTTP_200_OK,
    )
