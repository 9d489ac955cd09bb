"""
Authentication events for the audit trail.

Only successful logins, logouts and token refreshes are recorded. Failed
login attempts are never written here.
"""

import logging

from apps.audit.services import AUTH_LOG_NAME, append_activity

logger = logging.getLogger(__name__)

METHOD_SESSION = "session"
METHOD_API_TOKEN = "api_token"
METHOD_TOKEN_REFRESH = "token_refresh"

_VIA_API = {METHOD_API_TOKEN}


def _describe(action, method):
    if method in _VIA_API:
        return f"User {action} via API"
    return f"User {action}"


def record_login(context, method=METHOD_SESSION):
    """
    Write the login event. ``context.session_id`` must already hold the
    correlation id minted for this login.
    """
    logger.info(
        "user_logged_in",
        extra={
            "operation": "LOGIN",
            "actor_id": str(context.actor_id),
            "method": method,
            "request_id": context.request_id,
        },
    )
    return append_activity(
        context,
        _describe("logged in", method),
        log_name=AUTH_LOG_NAME,
        properties={"method": method},
    )


def record_logout(context, method=METHOD_SESSION):
    """Write the logout event; ``context.session_id`` may be None."""
    logger.info(
        "user_logged_out",
        extra={
            "operation": "LOGOUT",
            "actor_id": str(context.actor_id),
            "method": method,
            "request_id": context.request_id,
        },
    )
    return append_activity(
        context,
        _describe("logged out", method),
        log_name=AUTH_LOG_NAME,
        properties={"method": method},
    )


def record_token_refresh(context):
    return append_activity(
        context,
        "User refreshed API token",
        log_name=AUTH_LOG_NAME,
        properties={"method": METHOD_TOKEN_REFRESH},
    )
