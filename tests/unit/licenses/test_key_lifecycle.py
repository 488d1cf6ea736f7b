"""
Unit tests for KeyLifecycleManager and key handlers.
"""

import pytest
import pytest_asyncio

from applications.domain.application import Application
from core.config import ServiceConfig
from core.domain.exceptions import (
    ApplicationNotFoundError,
    DuplicateLicenseKeyError,
    LicenseKeyNotFoundError,
    PermissionDeniedError,
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
from licenses.domain import license_key as license_key_module
from licenses.domain.services import KeyLifecycleManager


@pytest.fixture
def config():
    return ServiceConfig(
        super_admin_id="root-admin",
        max_apps_per_owner=10,
        admin_app_allowance=999,
        key_suffix_length=6,
        key_generation_attempts=3,
        support_cache_ttl=0,
    )


@pytest_asyncio.fixture
async def owned_application(memory_application_repository):
    application = Application.create(name="Launcher", owner_id="owner-1")
    return await memory_application_repository.save(application)


@pytest.fixture
def create_handler(
    memory_license_key_repository, memory_application_repository, memory_resolver, config
):
    return CreateKeyHandler(
        license_key_repository=memory_license_key_repository,
        application_repository=memory_application_repository,
        permission_resolver=memory_resolver,
        config=config,
    )


@pytest.mark.asyncio
class TestKeyLifecycleManager:
    """Tests for KeyLifecycleManager."""

    async def test_issue_retries_on_collision(self, memory_license_key_repository, monkeypatch):
        """Test a colliding suffix is regenerated."""
        suffixes = iter(["AAAAAA", "AAAAAA", "BBBBBB"])
        monkeypatch.setattr(
            license_key_module, "generate_key", lambda prefix, length=6: f"{prefix}-{next(suffixes)}"
        )

        first = await KeyLifecycleManager.issue(
            "api_x", "PRO", 1, None, memory_license_key_repository
        )
        second = await KeyLifecycleManager.issue(
            "api_x", "PRO", 1, None, memory_license_key_repository
        )

        assert first.key == "PRO-AAAAAA"
        assert second.key == "PRO-BBBBBB"
        assert memory_license_key_repository.save_calls == 3

    async def test_issue_gives_up(self, memory_license_key_repository, monkeypatch):
        monkeypatch.setattr(license_key_module, "generate_key", lambda prefix, length=6: "PRO-SAME00")
        await KeyLifecycleManager.issue("api_x", "PRO", 1, None, memory_license_key_repository)

        with pytest.raises(DuplicateLicenseKeyError):
            await KeyLifecycleManager.issue(
                "api_x", "PRO", 1, None, memory_license_key_repository, attempts=2
            )

    async def test_ban_unknown_key(self, memory_license_key_repository):
        with pytest.raises(LicenseKeyNotFoundError):
            await KeyLifecycleManager.ban("api_x", "PRO-NOPE00", memory_license_key_repository)


@pytest.mark.asyncio
class TestKeyHandlers:
    """Tests for the key lifecycle handlers."""

    async def test_owner_creates_key(self, create_handler, owned_application):
        """Test an owner issues a key with a parsed device limit."""
        result = await create_handler.handle(
            CreateKeyCommand(
                requester_id="owner-1",
                api_key=owned_application.api_key,
                prefix="PRO",
                lifetime_days=30,
                device_limit="3",
            )
        )

        assert result.key.startswith("PRO-")
        assert result.api == owned_application.api_key
        assert result.device_limit == 3
        assert result.hwid == []

    async def test_stranger_cannot_create(self, create_handler, owned_application):
        with pytest.raises(PermissionDeniedError):
            await create_handler.handle(
                CreateKeyCommand(
                    requester_id="u2",
                    api_key=owned_application.api_key,
                    prefix="PRO",
                    lifetime_days=30,
                )
            )

    async def test_admin_unknown_application(self, create_handler):
        """Test the admin passes the permission check but the app must exist."""
        with pytest.raises(ApplicationNotFoundError):
            await create_handler.handle(
                CreateKeyCommand(
                    requester_id="root-admin",
                    api_key="api_missing",
                    prefix="PRO",
                    lifetime_days=30,
                )
            )

    async def test_ban_reset_delete(
        self,
        create_handler,
        owned_application,
        memory_license_key_repository,
        memory_resolver,
    ):
        """Test the administration handlers act on the stored key."""
        issued = await create_handler.handle(
            CreateKeyCommand(
                requester_id="owner-1",
                api_key=owned_application.api_key,
                prefix="PRO",
                lifetime_days=30,
            )
        )
        api_key = owned_application.api_key
        repository = memory_license_key_repository
        memory_license_key_repository.keys[issued.key] = repository.keys[issued.key].bind_device("H1")

        await ResetHwidHandler(repository, memory_resolver).handle(
            ResetHwidCommand(requester_id="owner-1", api_key=api_key, key=issued.key)
        )
        found = await GetKeyHandler(repository, memory_resolver).handle(
            GetKeyQuery(requester_id="owner-1", api_key=api_key, key=issued.key)
        )
        assert found.hwid == []
        assert found.used is False

        await BanKeyHandler(repository, memory_resolver).handle(
            BanKeyCommand(requester_id="owner-1", api_key=api_key, key=issued.key)
        )
        keys = await ListKeysHandler(repository, memory_resolver).handle(
            ListKeysQuery(requester_id="owner-1", api_key=api_key)
        )
        assert [k.banned for k in keys] == [True]

        await DeleteKeyHandler(repository, memory_resolver).handle(
            DeleteKeyCommand(requester_id="owner-1", api_key=api_key, key=issued.key)
        )
        with pytest.raises(LicenseKeyNotFoundError):
            await GetKeyHandler(repository, memory_resolver).handle(
                GetKeyQuery(requester_id="owner-1", api_key=api_key, key=issued.key)
            )

    async def test_key_scoped_to_application(
        self, create_handler, owned_application, memory_license_key_repository, memory_resolver
    ):
        """Test a key is not found through another application's API key."""
        issued = await create_handler.handle(
            CreateKeyCommand(
                requester_id="owner-1",
                api_key=owned_application.api_key,
                prefix="PRO",
                lifetime_days=30,
            )
        )

        with pytest.raises(LicenseKeyNotFoundError):
            await DeleteKeyHandler(memory_license_key_repository, memory_resolver).handle(
                DeleteKeyCommand(requester_id="root-admin", api_key="api_other", key=issued.key)
            )
