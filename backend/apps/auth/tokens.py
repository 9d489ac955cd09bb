"""
JWT issuance helpers on top of simplejwt.

Every refresh/access pair carries the audit session id minted at login,
so activities recorded with a bearer token are correlated with the login.
"""

from datetime import datetime, timezone

from rest_framework_simplejwt.settings import api_settings as jwt_settings
from rest_framework_simplejwt.token_blacklist.models import (
    BlacklistedToken,
    OutstandingToken,
)
from rest_framework_simplejwt.tokens import RefreshToken

from apps.audit.sessions import attach_to_token

TOKEN_TYPE = "Bearer"
DEFAULT_DEVICE_NAME = "api-token"


def issue_token_pair(user, session_id, device_name=None):
    refresh = RefreshToken.for_user(user)
    refresh["device_name"] = device_name or DEFAULT_DEVICE_NAME
    attach_to_token(refresh, session_id)
    # Claims must be set before the access token is derived
    access = refresh.access_token
    return {
        "token": str(access),
        "refresh": str(refresh),
        "token_type": TOKEN_TYPE,
        "expires_at": expiry_of(access),
    }


def expiry_of(token):
    if token is None or "exp" not in token:
        return None
    return datetime.fromtimestamp(token["exp"], tz=timezone.utc).isoformat()


def token_user_id(token):
    return str(token[jwt_settings.USER_ID_CLAIM])


def revoke_all_tokens(user):
    """Blacklist every outstanding refresh token of ``user``."""
    revoked = 0
    for outstanding in OutstandingToken.objects.filter(user=user):
        _, created = BlacklistedToken.objects.get_or_create(token=outstanding)
        revoked += int(created)
    return revoked
