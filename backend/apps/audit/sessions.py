"""
Audit session correlation.

A correlation id is minted once per login and attached to every activity
recorded while that login is active. Web logins keep it in the Django
session; API logins carry it as a claim inside the issued JWT pair.
"""

import uuid

SESSION_KEY = "audit_session_id"
TOKEN_CLAIM = "audit_session_id"


def begin_session(session=None):
    """Mint a new correlation id, storing it in ``session`` when given."""
    session_id = str(uuid.uuid4())
    if session is not None:
        session[SESSION_KEY] = session_id
    return session_id


def current_session(request):
    """Return the correlation id of the active login, or None."""
    if request is None:
        return None

    token = getattr(request, "auth", None)
    if token is not None and hasattr(token, "get"):
        session_id = token.get(TOKEN_CLAIM)
        if session_id:
            return session_id

    session = getattr(request, "session", None)
    if session is not None:
        return session.get(SESSION_KEY)
    return None


def attach_to_token(token, session_id):
    """Carry the correlation id inside a simplejwt token (and its access token)."""
    if session_id:
        token[TOKEN_CLAIM] = session_id
    return token
