"""
Unit tests for DeviceBindingValidator and ValidateKeyHandler.
"""

from dataclasses import replace
from datetime import timedelta

import pytest
import pytest_asyncio

from activations.application.commands.validate_key import ValidateKeyCommand
from activations.application.handlers.validate_key_handler import ValidateKeyHandler
from activations.domain.device_binding import DeviceBinding
from activations.domain.services import DeviceBindingValidator
from applications.domain.application import Application
from core.domain.exceptions import KeyBannedError, KeyExpiredError
from licenses.domain.license_key import LicenseKey


@pytest_asyncio.fixture
async def application(memory_application_repository):
    return await memory_application_repository.save(
        Application.create(name="Launcher", owner_id="owner-1")
    )


@pytest_asyncio.fixture
async def issued_key(application, memory_license_key_repository):
    license_key = LicenseKey.create(
        api_key=application.api_key, prefix="PRO", lifetime_days=30, device_limit=2
    )
    return await memory_license_key_repository.save(license_key)


@pytest.fixture
def handler(
    memory_application_repository,
    memory_license_key_repository,
    memory_device_binding_repository,
):
    return ValidateKeyHandler(
        application_repository=memory_application_repository,
        license_key_repository=memory_license_key_repository,
        device_binding_repository=memory_device_binding_repository,
    )


class TestEnsureRedeemable:
    """Tests for the ban and expiry rules."""

    def test_banned_before_expired(self):
        """Test a banned and expired key reports the ban."""
        license_key = LicenseKey.create(api_key="api_x", prefix="T", lifetime_days=1).ban()

        with pytest.raises(KeyBannedError):
            DeviceBindingValidator.ensure_redeemable(
                license_key, license_key.expires_at + timedelta(days=1)
            )

    def test_expired(self):
        license_key = LicenseKey.create(api_key="api_x", prefix="T", lifetime_days=1)

        with pytest.raises(KeyExpiredError):
            DeviceBindingValidator.ensure_redeemable(
                license_key, license_key.expires_at + timedelta(seconds=1)
            )


class TestDeviceBinding:
    def test_create(self):
        binding = DeviceBinding.create(license_key_id=None, hwid="H1")
        assert str(binding.hwid) == "H1"
        assert binding.bound_at.tzinfo is not None


@pytest.mark.asyncio
class TestValidateKeyHandler:
    """Tests for ValidateKeyHandler."""

    async def test_first_redemption_binds(self, handler, application, issued_key, memory_license_key_repository):
        """Test the first device is bound and recorded."""
        result = await handler.handle(
            ValidateKeyCommand(
                api_key=application.api_key, key=issued_key.key, hwid="H1", system_info="Win"
            )
        )

        assert result.accepted is True
        assert result.reason == "VALID"
        assert result.message == "Valid key"
        stored = memory_license_key_repository.keys[issued_key.key]
        assert stored.hwids == ("H1",)
        assert stored.used is True
        assert stored.system_info == "Win"

    async def test_bound_device_revalidates(self, handler, application, issued_key, memory_license_key_repository):
        command = ValidateKeyCommand(api_key=application.api_key, key=issued_key.key, hwid="H1")
        await handler.handle(command)

        result = await handler.handle(command)

        assert result.accepted is True
        assert memory_license_key_repository.keys[issued_key.key].device_count == 1

    async def test_device_limit(self, handler, application, issued_key):
        """Test a third device is rejected on a two-device key."""
        for hwid in ("H1", "H2"):
            await handler.handle(
                ValidateKeyCommand(api_key=application.api_key, key=issued_key.key, hwid=hwid)
            )

        result = await handler.handle(
            ValidateKeyCommand(api_key=application.api_key, key=issued_key.key, hwid="H3")
        )

        assert result.accepted is False
        assert result.reason == "DEVICE_LIMIT_REACHED"
        assert result.message == "Device limit reached"

    async def test_unknown_application(self, handler, issued_key):
        result = await handler.handle(
            ValidateKeyCommand(api_key="api_unknown", key=issued_key.key, hwid="H1")
        )
        assert (result.accepted, result.reason, result.message) == (
            False,
            "INVALID_APPLICATION",
            "Invalid API",
        )

    async def test_unknown_key(self, handler, application):
        result = await handler.handle(
            ValidateKeyCommand(api_key=application.api_key, key="PRO-NOPE00", hwid="H1")
        )
        assert result.reason == "INVALID_KEY"
        assert result.message == "Invalid key"

    async def test_banned_key_rejects_bound_device(
        self, handler, application, issued_key, memory_license_key_repository
    ):
        """Test a ban also locks out devices bound before it."""
        command = ValidateKeyCommand(api_key=application.api_key, key=issued_key.key, hwid="H1")
        await handler.handle(command)
        await memory_license_key_repository.mark_banned(application.api_key, issued_key.key)

        result = await handler.handle(command)

        assert result.accepted is False
        assert result.reason == "KEY_BANNED"

    async def test_expired_key(self, handler, application, issued_key, memory_license_key_repository):
        memory_license_key_repository.keys[issued_key.key] = replace(
            issued_key, expires_at=issued_key.created_at - timedelta(seconds=1)
        )

        result = await handler.handle(
            ValidateKeyCommand(api_key=application.api_key, key=issued_key.key, hwid="H1")
        )

        assert result.reason == "KEY_EXPIRED"
        assert result.message == "Key expired"
