"""
Support management handlers.

Handlers for granting, revoking and inspecting support staff rights,
and for the caller's permission summary.
"""

import logging
from typing import List

from applications.domain.services import ApplicationQuota
from applications.ports.application_repository import ApplicationRepository
from core.domain.exceptions import (
    PermissionDeniedError,
    ProtectedAdminError,
    SupportNotFoundError,
)
from core.infrastructure.events import event_bus
from support.application.commands.support_commands import AddSupportCommand, DeleteSupportCommand
from support.application.dto.support_dto import (
    PermissionSummaryDTO,
    SupportGrantDTO,
    SupportStatusDTO,
)
from support.application.queries.support_queries import (
    CheckPermissionQuery,
    CheckSupportQuery,
    GetSupportsQuery,
)
from support.application.services.support_cache_service import SupportCacheService
from support.domain.events import SupportGranted, SupportRevoked
from support.domain.services import PermissionResolver
from support.domain.support_grant import SupportGrant
from support.ports.support_repository import SupportRepository

logger = logging.getLogger(__name__)


def to_support_grant_dto(grant: SupportGrant) -> SupportGrantDTO:
    """Build a SupportGrantDTO from a domain entity."""
    return SupportGrantDTO(
        id=grant.id,
        user_id=grant.user_id,
        added_by=grant.added_by,
        added_at=grant.added_at,
    )


class AddSupportHandler:
    """Handler for AddSupportCommand."""

    def __init__(
        self,
        support_repository: SupportRepository,
        permission_resolver: PermissionResolver,
        support_cache: SupportCacheService = None,
    ):
        """Initialize handler with dependencies."""
        self.support_repository = support_repository
        self.permission_resolver = permission_resolver
        self.support_cache = support_cache

    async def handle(self, command: AddSupportCommand) -> SupportGrantDTO:
        """
        Handle add support command.

        Args:
            command: AddSupportCommand

        Returns:
            SupportGrantDTO for the new grant

        Raises:
            PermissionDeniedError: If admin_id is not the super-admin
            DuplicateSupportError: If user_id is already support staff
        """
        if not self.permission_resolver.is_admin(command.admin_id):
            raise PermissionDeniedError("Only admin can add")

        grant = SupportGrant.create(user_id=command.user_id, added_by=command.admin_id)
        saved = await self.support_repository.add(grant)

        if self.support_cache:
            await self.support_cache.invalidate(saved.user_id)

        await event_bus.publish(SupportGranted(user_id=saved.user_id, added_by=saved.added_by))

        return to_support_grant_dto(saved)


class DeleteSupportHandler:
    """Handler for DeleteSupportCommand."""

    def __init__(
        self,
        support_repository: SupportRepository,
        permission_resolver: PermissionResolver,
        support_cache: SupportCacheService = None,
    ):
        """Initialize handler with dependencies."""
        self.support_repository = support_repository
        self.permission_resolver = permission_resolver
        self.support_cache = support_cache

    async def handle(self, command: DeleteSupportCommand) -> None:
        """
        Handle delete support command.

        Args:
            command: DeleteSupportCommand

        Raises:
            PermissionDeniedError: If admin_id is not the super-admin
            ProtectedAdminError: If the target is the super-admin
            SupportNotFoundError: If user_id holds no grant
        """
        if not self.permission_resolver.is_admin(command.admin_id):
            raise PermissionDeniedError("Only admin can delete")

        if self.permission_resolver.is_admin(command.user_id):
            logger.warning(
                "Refused removal of the super-admin",
                extra={"admin_id": command.admin_id},
            )
            raise ProtectedAdminError()

        removed = await self.support_repository.remove(command.user_id)
        if not removed:
            raise SupportNotFoundError()

        if self.support_cache:
            await self.support_cache.invalidate(command.user_id)

        await event_bus.publish(
            SupportRevoked(user_id=command.user_id, removed_by=command.admin_id)
        )


class CheckSupportHandler:
    """Handler for CheckSupportQuery."""

    def __init__(self, support_repository: SupportRepository):
        """Initialize handler with repository."""
        self.support_repository = support_repository

    async def handle(self, query: CheckSupportQuery) -> SupportStatusDTO:
        grant = await self.support_repository.find_by_user_id(query.user_id)
        if not grant:
            return SupportStatusDTO(is_support=False, user=None)
        return SupportStatusDTO(is_support=True, user=to_support_grant_dto(grant))


class GetSupportsHandler:
    """Handler for GetSupportsQuery."""

    def __init__(self, support_repository: SupportRepository):
        """Initialize handler with repository."""
        self.support_repository = support_repository

    async def handle(self, query: GetSupportsQuery) -> List[SupportGrantDTO]:
        grants = await self.support_repository.list_all()
        return [to_support_grant_dto(grant) for grant in grants]


class CheckPermissionHandler:
    """Handler for CheckPermissionQuery."""

    def __init__(
        self,
        permission_resolver: PermissionResolver,
        application_repository: ApplicationRepository,
        quota: ApplicationQuota,
    ):
        """Initialize handler with dependencies."""
        self.permission_resolver = permission_resolver
        self.application_repository = application_repository
        self.quota = quota

    async def handle(self, query: CheckPermissionQuery) -> PermissionSummaryDTO:
        """
        Handle check permission query.

        Args:
            query: CheckPermissionQuery

        Returns:
            PermissionSummaryDTO with the caller's quota usage
        """
        grant = await self.permission_resolver.resolve(query.user_id, query.api_key or "")
        app_count = await self.application_repository.count_by_owner(query.user_id)
        is_admin = self.permission_resolver.is_admin(query.user_id)

        return PermissionSummaryDTO(
            has_permission=grant.has_permission,
            is_admin=is_admin,
            app_count=app_count,
            max_apps=self.quota.limit_for(is_admin),
        )
