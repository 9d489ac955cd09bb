"""
Explicit per-request context handed to every audit-producing service call.
"""

from dataclasses import dataclass, replace
from typing import Any, Optional

from django.conf import settings

from apps.audit.sessions import current_session


@dataclass(frozen=True)
class RequestContext:
    actor: Any = None
    session_id: Optional[str] = None
    ip: Optional[str] = None
    user_agent: Optional[str] = None
    request_id: Optional[str] = None

    @classmethod
    def from_request(cls, request, actor=None):
        if actor is None:
            actor = getattr(request, "user", None)
        if actor is not None and not getattr(actor, "is_authenticated", False):
            actor = None
        return cls(
            actor=actor,
            session_id=current_session(request),
            ip=client_ip(request),
            user_agent=request.META.get("HTTP_USER_AGENT"),
            request_id=getattr(request, "request_id", None),
        )

    @property
    def actor_id(self):
        return getattr(self.actor, "pk", None)

    def with_session(self, session_id):
        return replace(self, session_id=session_id)

    def client_properties(self):
        return {
            "ip": self.ip,
            "user_agent": self.user_agent,
            "session_id": self.session_id,
        }


def client_ip(request):
    if getattr(settings, "USE_X_FORWARDED_FOR", False):
        forwarded = request.META.get("HTTP_X_FORWARDED_FOR")
        if forwarded:
            return forwarded.split(",")[0].strip()
    return request.META.get("REMOTE_ADDR")
