"""
Response envelope.

Every API response carries success, message and timestamp next to
the action payload; errors add a machine-readable code.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from rest_framework import status as http_status
from rest_framework.response import Response


def envelope(
    success: bool,
    message: str,
    payload: Optional[Dict[str, Any]] = None,
    code: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Build the response body.

    Args:
        success: Whether the action succeeded
        message: Human-readable message
        payload: Action-specific fields merged at the top level
        code: Machine-readable error code

    Returns:
        Response body dictionary
    """
    body: Dict[str, Any] = {"success": success, "message": message}
    if payload:
        body.update(payload)
    if code:
        body["code"] = code
    body["timestamp"] = datetime.now(timezone.utc).isoformat()
    return body


def envelope_response(
    success: bool,
    message: str,
    payload: Optional[Dict[str, Any]] = None,
    code: Optional[str] = None,
    status: int = http_status.HTTP_200_OK,
) -> Response:
    """Wrap envelope() in a DRF Response."""
    return Response(envelope(success, message, payload, code), status=status)
