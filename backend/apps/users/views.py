"""
User views: get current user, list users, create users.

User creation requires super-admin role.
"""

from django.db import IntegrityError
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from core.permissions import IsAuthenticatedUser, IsSuperAdmin
from apps.users.models import User
from apps.users.serializers import UserSerializer, UserCreateSerializer


class UserPagination(PageNumberPagination):
    page_size = 50
    page_size_query_param = "per_page"
    max_page_size = 100


@api_view(["GET"])
@permission_classes([IsAuthenticatedUser])
def get_current_user(request):
    """
    GET /api/v1/users/me

    Get current authenticated user.
    """
    serializer = UserSerializer(request.user)
    return Response({"data": serializer.data}, status=status.HTTP_200_OK)


@api_view(["GET", "POST"])
@permission_classes([IsAuthenticatedUser])
def list_or_create_users(request):
    """
    GET /api/v1/users - List all users with pagination (authenticated users).
    POST /api/v1/users - Create a new user (super-admin only).
    """
    if request.method == "GET":
        paginator = UserPagination()
        users = User.objects.all().order_by("name", "id")
        page = paginator.paginate_queryset(users, request)

        serializer = UserSerializer(page, many=True)

        return paginator.get_paginated_response(serializer.data)

    if not IsSuperAdmin().has_permission(request, None):
        return Response(
            {
                "error": {
                    "code": "FORBIDDEN",
                    "message": "Only super-admins can create users",
                    "details": {},
                }
            },
            status=status.HTTP_403_FORBIDDEN,
        )

    serializer = UserCreateSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        user = User.objects.create_user(
            email=serializer.validated_data["email"],
            password=serializer.validated_data["password"],
            name=serializer.validated_data["name"],
            role=serializer.validated_data["role"],
        )
    except IntegrityError:
        email = serializer.validated_data["email"]
        return Response(
            {
                "error": {
                    "code": "CONFLICT",
                    "message": f"User with email '{email}' already exists",
                    "details": {},
                }
            },
            status=status.HTTP_409_CONFLICT,
        )

    return Response(
        {"data": UserSerializer(user).data}, status=status.HTTP_201_CREATED
    )
