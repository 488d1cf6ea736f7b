"""
Action dispatcher.

Routes a typed action request to the handler of the owning module
and shapes the handler result into the response payload.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict

from activations.application.commands.validate_key import ValidateKeyCommand
from activations.application.handlers.validate_key_handler import ValidateKeyHandler
from api.exceptions import InvalidActionError
from api.state import ServiceState
from api.v1.actions.requests import PingQuery
from api.v1.actions.serializers import (
    ApplicationSerializer,
    ApplicationWithKeyCountSerializer,
    LicenseKeySerializer,
    SupportGrantSerializer,
)
from applications.application.commands.create_application import CreateApplicationCommand
from applications.application.commands.delete_application import DeleteApplicationCommand
from applications.application.handlers.application_handlers import (
    CreateApplicationHandler,
    DeleteApplicationHandler,
    ListApplicationsHandler,
    ListOwnedApplicationsHandler,
)
from applications.application.queries.list_applications import (
    ListApplicationsQuery,
    ListOwnedApplicationsQuery,
)
from licenses.application.commands.key_commands import (
    BanKeyCommand,
    CreateKeyCommand,
    DeleteKeyCommand,
    ResetHwidCommand,
)
from licenses.application.handlers.key_handlers import (
    BanKeyHandler,
    CreateKeyHandler,
    DeleteKeyHandler,
    GetKeyHandler,
    ListKeysHandler,
    ResetHwidHandler,
)
from licenses.application.queries.key_queries import GetKeyQuery, ListKeysQuery
from support.application.commands.support_commands import AddSupportCommand, DeleteSupportCommand
from support.application.handlers.support_handlers import (
    AddSupportHandler,
    CheckPermissionHandler,
    CheckSupportHandler,
    DeleteSupportHandler,
    GetSupportsHandler,
)
from support.application.queries.support_queries import (
    CheckPermissionQuery,
    CheckSupportQuery,
    GetSupportsQuery,
)

logger = logging.getLogger(__name__)


@dataclass
class ActionResult:
    """Outcome of a dispatched action."""

    success: bool
    message: str
    payload: Dict[str, Any] = field(default_factory=dict)


class ActionDispatcher:
    """Dispatches typed action requests with explicit collaborators."""

    def __init__(self, state: ServiceState):
        self.state = state

    async def dispatch(self, request) -> ActionResult:
        """
        Dispatch an action request.

        Args:
            request: Typed command or query built by the action serializer

        Returns:
            ActionResult

        Raises:
            DomainException: Propagated from the handler
            InvalidActionError: If the request type has no handler
        """
        state = self.state

        match request:
            case PingQuery():
                return ActionResult(True, "API working")

            case CheckSupportQuery():
                status = await CheckSupportHandler(state.support_repository).handle(request)
                if not status.is_support:
                    return ActionResult(False, "No permission", {"is_support": False})
                return ActionResult(
                    True,
                    "Support user",
                    {"is_support": True, "user": SupportGrantSerializer(status.user).data},
                )

            case CreateApplicationCommand():
                handler = CreateApplicationHandler(
                    application_repository=state.application_repository,
                    permission_resolver=state.permission_resolver,
                    quota=state.quota,
                )
                application = await handler.handle(request)
                return ActionResult(True, "App created", {"api_key": application.api_key})

            case DeleteApplicationCommand():
                handler = DeleteApplicationHandler(
                    application_repository=state.application_repository,
                    permission_resolver=state.permission_resolver,
                )
                await handler.handle(request)
                return ActionResult(True, "App deleted")

            case ListApplicationsQuery():
                handler = ListApplicationsHandler(
                    application_repository=state.application_repository,
                    permission_resolver=state.permission_resolver,
                )
                listing = await handler.handle(request)
                return ActionResult(
                    True,
                    "Applications loaded",
                    {
                        "applications": ApplicationWithKeyCountSerializer(
                            listing.applications, many=True
                        ).data,
                        "is_admin": listing.is_admin,
                    },
                )

            case ListOwnedApplicationsQuery():
                handler = ListOwnedApplicationsHandler(state.application_repository)
                applications = await handler.handle(request)
                return ActionResult(
                    True,
                    "Applications loaded",
                    {"applications": ApplicationSerializer(applications, many=True).data},
                )

            case CreateKeyCommand():
                handler = CreateKeyHandler(
                    license_key_repository=state.license_key_repository,
                    application_repository=state.application_repository,
                    permission_resolver=state.permission_resolver,
                    config=state.config,
                )
                license_key = await handler.handle(request)
                return ActionResult(True, "Key created", {"key": license_key.key})

            case DeleteKeyCommand():
                handler = DeleteKeyHandler(
                    license_key_repository=state.license_key_repository,
                    permission_resolver=state.permission_resolver,
                )
                await handler.handle(request)
                return ActionResult(True, "Key deleted")

            case BanKeyCommand():
                handler = BanKeyHandler(
                    license_key_repository=state.license_key_repository,
                    permission_resolver=state.permission_resolver,
                )
                await handler.handle(request)
                return ActionResult(True, "Key banned")

            case ResetHwidCommand():
                handler = ResetHwidHandler(
                    license_key_repository=state.license_key_repository,
                    permission_resolver=state.permission_resolver,
                )
                await handler.handle(request)
                return ActionResult(True, "HWID reset")

            case GetKeyQuery():
                handler = GetKeyHandler(
                    license_key_repository=state.license_key_repository,
                    permission_resolver=state.permission_resolver,
                )
                license_key = await handler.handle(request)
                return ActionResult(
                    True, "Key found", {"key": LicenseKeySerializer(license_key).data}
                )

            case ListKeysQuery():
                handler = ListKeysHandler(
                    license_key_repository=state.license_key_repository,
                    permission_resolver=state.permission_resolver,
                )
                keys = await handler.handle(request)
                return ActionResult(
                    True, "Keys loaded", {"keys": LicenseKeySerializer(keys, many=True).data}
                )

            case AddSupportCommand():
                handler = AddSupportHandler(
                    support_repository=state.support_repository,
                    permission_resolver=state.permission_resolver,
                    support_cache=state.support_cache,
                )
                grant = await handler.handle(request)
                return ActionResult(True, f"Support {grant.user_id} added")

            case DeleteSupportCommand():
                handler = DeleteSupportHandler(
                    support_repository=state.support_repository,
                    permission_resolver=state.permission_resolver,
                    support_cache=state.support_cache,
                )
                await handler.handle(request)
                return ActionResult(True, "Support deleted")

            case GetSupportsQuery():
                grants = await GetSupportsHandler(state.support_repository).handle(request)
                return ActionResult(
                    True,
                    "Supports loaded",
                    {"supports": SupportGrantSerializer(grants, many=True).data},
                )

            case ValidateKeyCommand():
                handler = ValidateKeyHandler(
                    application_repository=state.application_repository,
                    license_key_repository=state.license_key_repository,
                    device_binding_repository=state.device_binding_repository,
                )
                result = await handler.handle(request)
                return ActionResult(result.accepted, result.message, {"reason": result.reason})

            case CheckPermissionQuery():
                handler = CheckPermissionHandler(
                    permission_resolver=state.permission_resolver,
                    application_repository=state.application_repository,
                    quota=state.quota,
                )
                summary = await handler.handle(request)
                return ActionResult(
                    True,
                    "Permission checked",
                    {
                        "has_permission": summary.has_permission,
                        "is_admin": summary.is_admin,
                        "app_count": summary.app_count,
                        "max_apps": summary.max_apps,
                    },
                )

            case _:
                logger.error("No handler for request %s", type(request).__name__)
                raise InvalidActionError(type(request).__name__)
