"""
Domain exceptions for the IP address inventory.

All exceptions follow the standard error format:
{
    "error": {
        "code": "ERROR_CODE",
        "message": "Human-readable description",
        "details": {}
    }
"""

from django.http import Http404
from rest_framework import exceptions as drf_exceptions
from rest_framework.views import exception_handler
from rest_framework.response import Response
from rest_framework import status
import logging

logger = logging.getLogger(__name__)


class DomainError(Exception):
    """Base exception for all domain errors."""

    def __init__(self, code, message, details=None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(DomainError):
    """Validation error - malformed IP address, missing or oversized fields."""

    def __init__(self, message, details=None):
        super().__init__("VALIDATION_ERROR", message, details)


class NotFoundError(DomainError):
    """Requested record or audit event does not exist."""

    def __init__(self, message, details=None):
        super().__init__("NOT_FOUND", message, details)


class PermissionDeniedError(DomainError):
    """Authenticated actor is not allowed to perform the action."""

    def __init__(self, message, details=None):
        super().__init__("FORBIDDEN", message, details)


class AuthenticationFailedError(DomainError):
    """Credentials or token could not be verified."""

    def __init__(self, message, details=None):
        super().__init__("UNAUTHORIZED", message, details)


class PersistenceError(DomainError):
    """Datastore write or read failed."""

    def __init__(self, message, details=None):
        super().__init__("PERSISTENCE_FAILURE", message, details)


STATUS_CODE_MAP = {
    "VALIDATION_ERROR": status.HTTP_422_UNPROCESSABLE_ENTITY,
    "NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "FORBIDDEN": status.HTTP_403_FORBIDDEN,
    "UNAUTHORIZED": status.HTTP_401_UNAUTHORIZED,
    "PERSISTENCE_FAILURE": status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def _error_response(code, message, details, status_code, headers=None):
    return Response(
        {
            "error": {
                "code": code,
                "message": message,
                "details": details,
            }
        },
        status=status_code,
        headers=headers,
    )


def domain_exception_handler(exc, context):
    """
    Custom exception handler for domain exceptions.

    Returns standard error format:
    {
        "error": {
            "code": "ERROR_CODE",
            "message": "Human-readable description",
            "details": {}
        }
    }
    """
    # Handle domain exceptions
    if isinstance(exc, DomainError):
        if isinstance(exc, PersistenceError):
            logger.error(
                "persistence_failure",
                extra={"operation": "PERSISTENCE", "detail": exc.message},
            )
        status_code = STATUS_CODE_MAP.get(exc.code, status.HTTP_400_BAD_REQUEST)
        return _error_response(exc.code, exc.message, exc.details, status_code)

    # Serializer validation: field-keyed error map
    if isinstance(exc, drf_exceptions.ValidationError):
        details = exc.detail
        if isinstance(details, list):
            details = {"non_field_errors": details}
        return _error_response(
            "VALIDATION_ERROR",
            "The given data was invalid.",
            details,
            status.HTTP_422_UNPROCESSABLE_ENTITY,
        )

    if isinstance(exc, Http404):
        return _error_response(
            "NOT_FOUND", "Resource not found", {}, status.HTTP_404_NOT_FOUND
        )

    # Use default REST framework exception handler for other exceptions
    response = exception_handler(exc, context)

    if response is not None:
        if isinstance(
            exc, (drf_exceptions.NotAuthenticated, drf_exceptions.AuthenticationFailed)
        ):
            code = "UNAUTHORIZED"
        elif isinstance(exc, drf_exceptions.PermissionDenied):
            code = "FORBIDDEN"
        elif isinstance(exc, drf_exceptions.MethodNotAllowed):
            code = "METHOD_NOT_ALLOWED"
        elif isinstance(exc, drf_exceptions.Throttled):
            code = "THROTTLED"
        else:
            code = "INTERNAL_ERROR"

        # Format standard REST framework errors
        if isinstance(response.data, dict) and "detail" in response.data:
            error_data = {
                "error": {
                    "code": code,
                    "message": str(response.data["detail"]),
                    "details": {},
                }
            }
        else:
            error_data = {
                "error": {
                    "code": code,
                    "message": "An error occurred",
                    "details": response.data,
                }
            }

        response.data = error_data
        return response

    # Log unhandled exceptions
    logger.exception("Unhandled exception", exc_info=exc)
    return _error_response(
        "INTERNAL_ERROR",
        "An internal error occurred",
        {},
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
