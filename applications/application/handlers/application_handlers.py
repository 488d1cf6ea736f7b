"""
Application registry handlers.

Handlers for creating, deleting and listing applications.
"""

import logging

from applications.application.commands.create_application import CreateApplicationCommand
from applications.application.commands.delete_application import DeleteApplicationCommand
from applications.application.dto.application_dto import ApplicationDTO, ApplicationListDTO
from applications.application.queries.list_applications import (
    ListApplicationsQuery,
    ListOwnedApplicationsQuery,
)
from applications.domain.application import Application
from applications.domain.events import ApplicationCreated, ApplicationDeleted
from applications.domain.services import ApplicationQuota
from applications.ports.application_repository import ApplicationRepository
from core.domain.exceptions import ApplicationNotFoundError, QuotaExceededError
from core.infrastructure.events import event_bus
from support.domain.services import PermissionResolver

logger = logging.getLogger(__name__)


def to_application_dto(application: Application, key_count: int = None) -> ApplicationDTO:
    """Build an ApplicationDTO from a domain entity."""
    return ApplicationDTO(
        id=application.id,
        name=application.name,
        api_key=application.api_key,
        created_by=application.created_by,
        created_at=application.created_at,
        key_count=key_count,
    )


class CreateApplicationHandler:
    """Handler for CreateApplicationCommand."""

    def __init__(
        self,
        application_repository: ApplicationRepository,
        permission_resolver: PermissionResolver,
        quota: ApplicationQuota,
    ):
        """Initialize handler with dependencies."""
        self.application_repository = application_repository
        self.permission_resolver = permission_resolver
        self.quota = quota

    async def handle(self, command: CreateApplicationCommand) -> ApplicationDTO:
        """
        Handle create application command.

        Args:
            command: CreateApplicationCommand

        Returns:
            ApplicationDTO carrying the fresh API key

        Raises:
            QuotaExceededError: If a non-admin owner is at the quota
            DuplicateApplicationNameError: If the name is already taken
        """
        is_admin = self.permission_resolver.is_admin(command.owner_id)
        owned = await self.application_repository.count_by_owner(command.owner_id)
        if not self.quota.can_create(owned, is_admin):
            logger.warning(
                "Application quota reached",
                extra={"owner_id": command.owner_id, "owned": owned},
            )
            raise QuotaExceededError(f"Limit {self.quota.max_apps_per_owner} apps reached")

        application = Application.create(name=command.name, owner_id=command.owner_id)
        saved = await self.application_repository.save(application)

        await event_bus.publish(
            ApplicationCreated(
                application_id=saved.id,
                name=saved.name,
                owner_id=saved.created_by,
            )
        )

        return to_application_dto(saved)


class DeleteApplicationHandler:
    """Handler for DeleteApplicationCommand."""

    def __init__(
        self,
        application_repository: ApplicationRepository,
        permission_resolver: PermissionResolver,
    ):
        """Initialize handler with dependencies."""
        self.application_repository = application_repository
        self.permission_resolver = permission_resolver

    async def handle(self, command: DeleteApplicationCommand) -> None:
        """
        Handle delete application command.

        Args:
            command: DeleteApplicationCommand

        Raises:
            ApplicationNotFoundError: If no application has that name
            PermissionDeniedError: If the requester may not act on it
        """
        application = await self.application_repository.find_by_name(command.name)
        if not application:
            raise ApplicationNotFoundError()

        await self.permission_resolver.require(command.requester_id, application.api_key)

        deleted = await self.application_repository.delete(application.id)
        if not deleted:
            # Removed concurrently between lookup and delete
            raise ApplicationNotFoundError()

        await event_bus.publish(
            ApplicationDeleted(
                application_id=application.id,
                name=application.name,
                deleted_by=command.requester_id,
            )
        )


class ListApplicationsHandler:
    """Handler for ListApplicationsQuery."""

    def __init__(
        self,
        application_repository: ApplicationRepository,
        permission_resolver: PermissionResolver,
    ):
        """Initialize handler with dependencies."""
        self.application_repository = application_repository
        self.permission_resolver = permission_resolver

    async def handle(self, query: ListApplicationsQuery) -> ApplicationListDTO:
        """
        Handle list applications query.

        Args:
            query: ListApplicationsQuery

        Returns:
            ApplicationListDTO with key counts and the admin flag
        """
        is_admin = self.permission_resolver.is_admin(query.requester_id)
        sees_all = await self.permission_resolver.is_staff(query.requester_id)
        owner_filter = None if sees_all else query.requester_id

        rows = await self.application_repository.list_with_key_counts(owner_filter)
        return ApplicationListDTO(
            applications=[to_application_dto(app, key_count) for app, key_count in rows],
            is_admin=is_admin,
        )


class ListOwnedApplicationsHandler:
    """Handler for ListOwnedApplicationsQuery."""

    def __init__(self, application_repository: ApplicationRepository):
        """Initialize handler with repository."""
        self.application_repository = application_repository

    async def handle(self, query: ListOwnedApplicationsQuery):
        applications = await self.application_repository.list_by_owner(query.owner_id)
        return [to_application_dto(app) for app in applications]
