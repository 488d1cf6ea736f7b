"""
CORS middleware.

Adds the configured cross-origin headers to every response.
"""

from typing import Callable

from django.conf import settings
from django.http import HttpRequest, HttpResponse

DEFAULT_CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
}


class CorsMiddleware:
    """Middleware applying CORS headers from settings.CORS_HEADERS."""

    def __init__(self, get_response: Callable):
        """Initialize middleware."""
        self.get_response = get_response
        self.headers = getattr(settings, "CORS_HEADERS", DEFAULT_CORS_HEADERS)

    def __call__(self, request: HttpRequest) -> HttpResponse:
        response = self.get_response(request)
        for header, value in self.headers.items():
            response[header] = value
        return response
