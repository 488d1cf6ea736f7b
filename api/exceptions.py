"""
API exception handlers.

This module provides custom exception handling for REST API responses.
Recoverable outcomes (absent rows, duplicates, quota) answer 200 with
success false; request and permission failures use 4xx; anything
unexpected answers a generic 500.
"""

import logging
from typing import Any, Dict, Optional

from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import APIException, ParseError
from rest_framework.response import Response
from rest_framework.views import exception_handler

from api.responses import envelope_response
from core.domain.exceptions import (
    ConflictError,
    DomainException,
    NotFoundError,
    PermissionDeniedError,
    ProtectedAdminError,
    QuotaExceededError,
    RedemptionRejectedError,
    RequestValidationError,
)
from core.metrics import errors_total

logger = logging.getLogger(__name__)


class InvalidActionError(DomainException):
    """Raised when the request names no known action."""

    def __init__(self, action: Optional[str] = None):
        super().__init__(f"Invalid action: {action or 'none'}", code="INVALID_ACTION")
        self.action = action


def custom_exception_handler(exc: Exception, context: Dict[str, Any]) -> Response:
    """Custom exception handler for REST API."""
    trace_id = _get_trace_id(context)
    endpoint = _get_endpoint(context)

    if isinstance(exc, DomainException):
        response = _handle_domain_exception(exc, trace_id)
        errors_total.labels(error_type=exc.code, endpoint=endpoint).inc()
    elif isinstance(exc, ParseError):
        logger.warning("Unparseable request body", extra={"trace_id": trace_id})
        response = envelope_response(
            False, "Invalid JSON", code="PARSE_ERROR", status=status.HTTP_400_BAD_REQUEST
        )
        errors_total.labels(error_type="PARSE_ERROR", endpoint=endpoint).inc()
    elif isinstance(exc, APIException):
        response = exception_handler(exc, context)
        code = (
            exc.default_code.upper().replace("-", "_")
            if hasattr(exc, "default_code")
            else "API_ERROR"
        )
        detail = exc.default_detail
        if isinstance(response.data, dict):
            detail = response.data.get("detail", detail)
        response.data = envelope_response(False, str(detail), code=code).data
        errors_total.labels(error_type=code, endpoint=endpoint).inc()
    elif isinstance(exc, Http404):
        response = envelope_response(
            False, "Resource not found", code="NOT_FOUND", status=status.HTTP_404_NOT_FOUND
        )
    else:
        response = _handle_unexpected_exception(exc, trace_id)
        errors_total.labels(error_type=exc.__class__.__name__, endpoint=endpoint).inc()

    if trace_id:
        response["X-Trace-ID"] = trace_id
    return response


def _get_trace_id(context: Dict[str, Any]) -> Optional[str]:
    """Extract trace ID from request context."""
    request = context.get("request")
    if not request:
        return None
    return getattr(request, "trace_id", getattr(request, "correlation_id", None))


def _get_endpoint(context: Dict[str, Any]) -> str:
    request = context.get("request")
    return request.path if request is not None else "unknown"


def _status_for(exc: DomainException) -> int:
    """HTTP status of a domain exception."""
    if isinstance(exc, PermissionDeniedError):
        return status.HTTP_403_FORBIDDEN
    if isinstance(exc, (RequestValidationError, ProtectedAdminError, InvalidActionError)):
        return status.HTTP_400_BAD_REQUEST
    if isinstance(
        exc, (NotFoundError, ConflictError, QuotaExceededError, RedemptionRejectedError)
    ):
        return status.HTTP_200_OK
    return status.HTTP_400_BAD_REQUEST


def _handle_domain_exception(exc: DomainException, trace_id: Optional[str]) -> Response:
    """Handle domain-specific exceptions."""
    status_code = _status_for(exc)

    logger.warning("Domain exception: %s - %s", exc.code, exc.message, extra={"trace_id": trace_id})

    payload = None
    if isinstance(exc, RequestValidationError) and exc.errors:
        payload = {"errors": exc.errors}
    return envelope_response(False, exc.message, payload, code=exc.code, status=status_code)


def _handle_unexpected_exception(exc: Exception, trace_id: Optional[str]) -> Response:
    """Handle unexpected or untracked exceptions."""
    logger.error("Unexpected error: %s", exc, extra={"trace_id": trace_id}, exc_info=True)
    return envelope_response(
        False,
        "Server error",
        code="INTERNAL_ERROR",
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
