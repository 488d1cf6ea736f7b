"""
Key lifecycle handlers.

Handlers for issuing, banning, deleting, resetting and reading keys.
Every handler resolves the requester's permission on the application
before touching a key.
"""
from typing import List

from applications.ports.application_repository import ApplicationRepository
from core.config import ServiceConfig
from core.domain.exceptions import ApplicationNotFoundError, LicenseKeyNotFoundError
from core.infrastructure.events import event_bus
from licenses.application.commands.key_commands import (
    BanKeyCommand,
    CreateKeyCommand,
    DeleteKeyCommand,
    ResetHwidCommand,
)
from licenses.application.dto.license_key_dto import LicenseKeyDTO
from licenses.application.queries.key_queries import GetKeyQuery, ListKeysQuery
from licenses.domain.events import (
    DevicesReset,
    LicenseKeyBanned,
    LicenseKeyCreated,
    LicenseKeyDeleted,
)
from licenses.domain.license_key import LicenseKey
from licenses.domain.services import KeyLifecycleManager
from licenses.ports.license_key_repository import LicenseKeyRepository
from support.domain.services import PermissionResolver


def to_license_key_dto(license_key: LicenseKey) -> LicenseKeyDTO:
    """Build a LicenseKeyDTO from a domain entity."""
    return LicenseKeyDTO(
        id=license_key.id,
        key=license_key.key,
        api=license_key.api_key,
        prefix=license_key.prefix,
        created_at=license_key.created_at,
        expires_at=license_key.expires_at,
        banned=license_key.banned,
        used=license_key.used,
        device_limit=license_key.device_limit,
        system_info=license_key.system_info,
        first_used=license_key.first_used,
        hwid=list(license_key.hwids),
        device_count=license_key.device_count,
    )


class CreateKeyHandler:
    """Handler for CreateKeyCommand."""

    def __init__(
        self,
        license_key_repository: LicenseKeyRepository,
        application_repository: ApplicationRepository,
        permission_resolver: PermissionResolver,
        config: ServiceConfig,
    ):
        """Initialize handler with dependencies."""
        self.license_key_repository = license_key_repository
        self.application_repository = application_repository
        self.permission_resolver = permission_resolver
        self.config = config

    async def handle(self, command: CreateKeyCommand) -> LicenseKeyDTO:
        """
        Handle create key command.

        Args:
            command: CreateKeyCommand

        Returns:
            LicenseKeyDTO for the issued key

        Raises:
            PermissionDeniedError: If the requester may not act on the application
            ApplicationNotFoundError: If the API key is unknown
        """
        await self.permission_resolver.require(command.requester_id, command.api_key)

        application = await self.application_repository.find_by_api_key(command.api_key)
        if not application:
            raise ApplicationNotFoundError()

        issued = await KeyLifecycleManager.issue(
            api_key=application.api_key,
            prefix=command.prefix,
            lifetime_days=command.lifetime_days,
            device_limit=command.device_limit,
            repository=self.license_key_repository,
            suffix_length=self.config.key_suffix_length,
            attempts=self.config.key_generation_attempts,
        )

        await event_bus.publish(
            LicenseKeyCreated(
                license_key_id=issued.id,
                api_key=issued.api_key,
                prefix=issued.prefix,
                device_limit=issued.device_limit,
                expires_at=issued.expires_at,
                issued_by=command.requester_id,
            )
        )

        return to_license_key_dto(issued)


class BanKeyHandler:
    """Handler for BanKeyCommand."""

    def __init__(
        self,
        license_key_repository: LicenseKeyRepository,
        permission_resolver: PermissionResolver,
    ):
        """Initialize handler with dependencies."""
        self.license_key_repository = license_key_repository
        self.permission_resolver = permission_resolver

    async def handle(self, command: BanKeyCommand) -> None:
        """
        Handle ban key command.

        Args:
            command: BanKeyCommand

        Raises:
            PermissionDeniedError: If the requester may not act on the application
            LicenseKeyNotFoundError: If the key does not exist for the application
        """
        await self.permission_resolver.require(command.requester_id, command.api_key)
        await KeyLifecycleManager.ban(command.api_key, command.key, self.license_key_repository)

        await event_bus.publish(
            LicenseKeyBanned(
                key=command.key,
                api_key=command.api_key,
                banned_by=command.requester_id,
            )
        )


class DeleteKeyHandler:
    """Handler for DeleteKeyCommand."""

    def __init__(
        self,
        license_key_repository: LicenseKeyRepository,
        permission_resolver: PermissionResolver,
    ):
        """Initialize handler with dependencies."""
        self.license_key_repository = license_key_repository
        self.permission_resolver = permission_resolver

    async def handle(self, command: DeleteKeyCommand) -> None:
        await self.permission_resolver.require(command.requester_id, command.api_key)
        await KeyLifecycleManager.delete(command.api_key, command.key, self.license_key_repository)

        await event_bus.publish(
            LicenseKeyDeleted(
                key=command.key,
                api_key=command.api_key,
                deleted_by=command.requester_id,
            )
        )


class ResetHwidHandler:
    """Handler for ResetHwidCommand."""

    def __init__(
        self,
        license_key_repository: LicenseKeyRepository,
        permission_resolver: PermissionResolver,
    ):
        """Initialize handler with dependencies."""
        self.license_key_repository = license_key_repository
        self.permission_resolver = permission_resolver

    async def handle(self, command: ResetHwidCommand) -> None:
        """
        Handle reset HWID command.

        After a reset the key validates like a freshly issued one.

        Raises:
            PermissionDeniedError: If the requester may not act on the application
            LicenseKeyNotFoundError: If the key does not exist for the application
        """
        await self.permission_resolver.require(command.requester_id, command.api_key)
        await KeyLifecycleManager.reset_devices(
            command.api_key, command.key, self.license_key_repository
        )

        await event_bus.publish(
            DevicesReset(
                key=command.key,
                api_key=command.api_key,
                reset_by=command.requester_id,
            )
        )


class ListKeysHandler:
    """Handler for ListKeysQuery."""

    def __init__(
        self,
        license_key_repository: LicenseKeyRepository,
        permission_resolver: PermissionResolver,
    ):
        """Initialize handler with dependencies."""
        self.license_key_repository = license_key_repository
        self.permission_resolver = permission_resolver

    async def handle(self, query: ListKeysQuery) -> List[LicenseKeyDTO]:
        await self.permission_resolver.require(query.requester_id, query.api_key)
        keys = await self.license_key_repository.list_by_application(query.api_key)
        return [to_license_key_dto(license_key) for license_key in keys]


class GetKeyHandler:
    """Handler for GetKeyQuery."""

    def __init__(
        self,
        license_key_repository: LicenseKeyRepository,
        permission_resolver: PermissionResolver,
    ):
        """Initialize handler with dependencies."""
        self.license_key_repository = license_key_repository
        self.permission_resolver = permission_resolver

    async def handle(self, query: GetKeyQuery) -> LicenseKeyDTO:
        """
        Handle get key query.

        Args:
            query: GetKeyQuery

        Returns:
            LicenseKeyDTO

        Raises:
            PermissionDeniedError: If the requester may not act on the application
            LicenseKeyNotFoundError: If the key does not exist for the application
        """
        await self.permission_resolver.require(query.requester_id, query.api_key)
        license_key = await self.license_key_repository.find_by_key(query.api_key, query.key)
        if not license_key:
            raise LicenseKeyNotFoundError()
        return to_license_key_dto(license_key)
