"""
Action API view.

A single endpoint receives {"action": <name>, ...fields}. GET answers
a service banner and OPTIONS an empty 200 for browser preflight.
"""

import logging
from collections.abc import Mapping

from asgiref.sync import async_to_sync
from django.conf import settings
from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.exceptions import InvalidActionError
from api.responses import envelope_response
from api.state import service_state
from api.v1.actions.dispatcher import ActionDispatcher
from api.v1.actions.requests import ACTION_SERIALIZERS, Action
from core.domain.exceptions import DomainException, RequestValidationError
from core.instrumentation import Status, StatusCode, get_tracer
from core.metrics import actions_total

logger = logging.getLogger(__name__)

tracer = get_tracer(__name__)


class ActionView(APIView):
    """View for every service action."""

    authentication_classes = []
    permission_classes = []

    @extend_schema(
        operation_id="service_banner",
        summary="Service banner",
        tags=["Actions"],
        responses={200: OpenApiResponse(description="Service is running")},
    )
    def get(self, request: Request) -> Response:
        """Service banner."""
        return envelope_response(
            True,
            "License key service running",
            {"version": getattr(settings, "SERVICE_VERSION", "1.0.0")},
        )

    def options(self, request: Request, *args, **kwargs) -> Response:
        """Preflight answer without a body."""
        return Response(status=status.HTTP_200_OK)

    @extend_schema(
        operation_id="dispatch_action",
        summary="Dispatch action",
        description=(
            "Run the named action. The body carries the action name and the "
            "action's flat field set, e.g. {\"action\": \"validate_key\", "
            "\"api\": \"api_...\", \"key\": \"PRO-ABC123\", \"hwid\": \"H1\"}."
        ),
        tags=["Actions"],
        request={"application/json": {"type": "object"}},
        responses={
            200: OpenApiResponse(description="Action result, success may be false"),
            400: OpenApiResponse(description="Missing fields, bad JSON or unknown action"),
            403: OpenApiResponse(description="No permission"),
            500: OpenApiResponse(description="Server error"),
        },
    )
    def post(self, request: Request) -> Response:
        """Dispatch an action."""
        data = request.data
        if not isinstance(data, Mapping):
            data = {}
        service_state.ensure_initialized()
        return async_to_sync(self._handle_action)(data)

    async def _handle_action(self, data: Mapping) -> Response:
        """Async handler for an action."""
        raw_action = data.get("action")

        with tracer.start_as_current_span("dispatch_action") as span:
            span.set_attribute("action", str(raw_action))

            try:
                action = Action(raw_action)
            except ValueError:
                span.set_status(Status(StatusCode.ERROR, "Invalid action"))
                actions_total.labels(action="invalid", success="false").inc()
                raise InvalidActionError(raw_action)

            serializer = ACTION_SERIALIZERS[action](data=data)
            if not serializer.is_valid():
                span.set_attribute("error", "validation_failed")
                span.set_attribute("error.details", str(serializer.errors))
                span.set_status(Status(StatusCode.ERROR, "Validation failed"))
                actions_total.labels(action=action.value, success="false").inc()
                raise RequestValidationError(serializer.error_message(), serializer.errors)

            try:
                result = await ActionDispatcher(service_state).dispatch(serializer.to_request())
            except DomainException as e:
                span.set_attribute("error", e.code)
                span.set_status(Status(StatusCode.ERROR, e.message))
                actions_total.labels(action=action.value, success="false").inc()
                raise
            except Exception as e:
                span.record_exception(e)
                span.set_status(Status(StatusCode.ERROR, "Unexpected error"))
                actions_total.labels(action=action.value, success="false").inc()
                raise

            span.set_attribute("success", result.success)
            span.set_status(Status(StatusCode.OK))
            actions_total.labels(action=action.value, success=str(result.success).lower()).inc()

            return envelope_response(result.success, result.message, result.payload)
