import logging
import uuid
from contextvars import ContextVar

# Context var for request_id so logging filter can access it (Gunicorn logs
# don't have record.request; they run in the same request context).
_request_id_ctx: ContextVar[str | None] = ContextVar("request_id", default=None)


def get_current_request_id() -> str | None:
    """Return the current request_id from context, for logging."""
    return _request_id_ctx.get()


class RequestIDFilter(logging.Filter):
    """Injects request_id into log records for structured logging."""

    def filter(self, record):
        # Services pass request_id explicitly; Django logs may pass
        # extra={"request": request}; Gunicorn logs use the contextvar
        if getattr(record, "request_id", None):
            return True
        request = getattr(record, "request", None)
        record.request_id = (
            getattr(request, "request_id", None) or get_current_request_id()
        )
        return True


class RequestIDMiddleware:
    """
    Injects X-Request-ID into:
    - request object
    - response header
    - logging context (via request attribute)
    """

    HEADER_NAME = "HTTP_X_REQUEST_ID"
    RESPONSE_HEADER = "X-Request-ID"

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        request_id = request.META.get(self.HEADER_NAME)

        if not request_id:
            request_id = str(uuid.uuid4())

        request.request_id = request_id
        token = _request_id_ctx.set(request_id)

        try:
            response = self.get_response(request)
        finally:
            _request_id_ctx.reset(token)
        response[self.RESPONSE_HEADER] = request_id
        return response
