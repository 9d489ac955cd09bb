"""
Authentication views: session login/logout (web) and token login, logout,
refresh, current user and registration (API).

Successful logins and logouts are written to the audit trail; failed
attempts are not.
"""

import logging

from django.contrib.auth import authenticate
from django.contrib.auth import login as session_login
from django.contrib.auth import logout as session_logout
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import RefreshToken

from core.exceptions import AuthenticationFailedError, PermissionDeniedError
from core.permissions import IsAuthenticatedUser
from apps.audit import recorder
from apps.audit.context import RequestContext
from apps.audit.sessions import TOKEN_CLAIM, begin_session
from apps.auth import tokens
from apps.auth.serializers import LoginSerializer, LogoutSerializer, RefreshSerializer
from apps.users.models import Role, User
from apps.users.serializers import UserCreateSerializer, UserSerializer

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "The provided credentials are incorrect."


def _authenticate(request, serializer):
    user = authenticate(
        request._request,
        email=serializer.validated_data["email"],
        password=serializer.validated_data["password"],
    )
    if user is None:
        raise AuthenticationFailedError(INVALID_CREDENTIALS)
    return user


# -----------------------------
# Web (session cookie)
# -----------------------------


@api_view(["POST"])
@permission_classes([AllowAny])
def session_login_view(request):
    """
    POST /auth/login

    Authenticate with email + password and start a session.
    The login event is recorded by the user_logged_in receiver.
    """
    serializer = LoginSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    user = _authenticate(request, serializer)
    session_login(request._request, user)

    return Response(
        {"message": "Login successful.", "data": {"user": UserSerializer(user).data}},
        status=status.HTTP_200_OK,
    )


@api_view(["POST"])
@permission_classes([IsAuthenticatedUser])
def session_logout_view(request):
    """
    POST /auth/logout

    End the session. The logout event is recorded by the user_logged_out
    receiver before the session is flushed.
    """
    session_logout(request._request)
    return Response({"message": "Logout successful."}, status=status.HTTP_200_OK)


# -----------------------------
# API (bearer token)
# -----------------------------


@api_view(["POST"])
@permission_classes([AllowAny])
def login(request):
    """
    POST /api/v1/auth/login

    Authenticate user and return a JWT pair.
    """
    serializer = LoginSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    user = _authenticate(request, serializer)

    session_id = begin_session()
    data = tokens.issue_token_pair(
        user, session_id, device_name=serializer.validated_data.get("device_name")
    )

    context = RequestContext.from_request(request, actor=user).with_session(session_id)
    recorder.record_login(context, method=recorder.METHOD_API_TOKEN)

    data["user"] = UserSerializer(user).data
    return Response(
        {"message": "Login successful.", "data": data}, status=status.HTTP_200_OK
    )


@api_view(["POST"])
@permission_classes([IsAuthenticatedUser])
def logout(request):
    """
    POST /api/v1/auth/logout

    Blacklist the given refresh token, or every token of the user when
    revoke_all is set. Access tokens expire on their own.
    """
    serializer = LogoutSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    if serializer.validated_data["revoke_all"]:
        revoked = tokens.revoke_all_tokens(request.user)
        logger.info(
            "tokens_revoked",
            extra={"operation": "REVOKE_ALL_TOKENS", "actor_id": str(request.user.pk), "count": revoked},
        )
    elif serializer.validated_data.get("refresh_token"):
        try:
            refresh = RefreshToken(serializer.validated_data["refresh_token"])
        except TokenError as exc:
            raise AuthenticationFailedError(str(exc))
        if tokens.token_user_id(refresh) != str(request.user.pk):
            raise PermissionDeniedError("Refresh token belongs to another user")
        refresh.blacklist()

    context = RequestContext.from_request(request)
    recorder.record_logout(context, method=recorder.METHOD_API_TOKEN)

    return Response({"message": "Logout successful."}, status=status.HTTP_200_OK)


@api_view(["POST"])
@permission_classes([AllowAny])
def refresh(request):
    """
    POST /api/v1/auth/refresh

    Rotate a refresh token: the old one is blacklisted and a new pair is
    issued under the same audit session.
    """
    serializer = RefreshSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        old_refresh = RefreshToken(serializer.validated_data["refresh_token"])
    except TokenError as exc:
        raise AuthenticationFailedError(str(exc))

    user = User.objects.filter(pk=tokens.token_user_id(old_refresh)).first()
    if user is None or not user.is_active:
        raise AuthenticationFailedError("User not found")

    session_id = old_refresh.get(TOKEN_CLAIM)
    device_name = (
        serializer.validated_data.get("device_name")
        or old_refresh.get("device_name")
    )
    old_refresh.blacklist()

    data = tokens.issue_token_pair(user, session_id, device_name=device_name)

    context = RequestContext.from_request(request, actor=user).with_session(session_id)
    recorder.record_token_refresh(context)

    data["user"] = UserSerializer(user).data
    return Response(
        {"message": "Token refreshed successfully.", "data": data},
        status=status.HTTP_200_OK,
    )


@api_view(["GET"])
@permission_classes([IsAuthenticatedUser])
def current_user(request):
    """
    GET /api/v1/auth/user

    Current user, role flag and access token expiry.
    """
    return Response(
        {
            "data": {
                "user": UserSerializer(request.user).data,
                "is_super_admin": request.user.is_super_admin,
                "token_expires_at": tokens.expiry_of(request.auth),
            }
        },
        status=status.HTTP_200_OK,
    )


@api_view(["POST"])
@permission_classes([AllowAny])
def register(request):
    """
    POST /api/v1/auth/register

    Self registration. New accounts always get the user role.
    """
    payload = {key: request.data.get(key) for key in ("email", "password", "name")}
    payload["role"] = Role.USER
    serializer = UserCreateSerializer(data=payload)
    serializer.is_valid(raise_exception=True)

    user = User.objects.create_user(
        email=serializer.validated_data["email"],
        password=serializer.validated_data["password"],
        name=serializer.validated_data["name"],
        role=Role.USER,
    )
    return Response(
        {"message": "Registration successful.", "data": UserSerializer(user).data},
        status=status.HTTP_201_CREATED,
    )
