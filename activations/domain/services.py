"""
Activation domain services.

Domain services contain business logic that doesn't naturally
fit within a single entity.
"""

from datetime import datetime, timezone
from typing import Optional, Tuple

from activations.ports.device_binding_repository import DeviceBindingRepository
from applications.ports.application_repository import ApplicationRepository
from core.domain.exceptions import (
    InvalidApplicationError,
    InvalidKeyError,
    KeyBannedError,
    KeyExpiredError,
)
from licenses.domain.license_key import LicenseKey
from licenses.ports.license_key_repository import LicenseKeyRepository


class DeviceBindingValidator:
    """
    Domain service for key redemption.

    Decision sequence, first failure wins:
    unknown application, unknown key, banned, expired, then the
    device binding step (already bound, limit reached, or bind).
    """

    @staticmethod
    def ensure_redeemable(license_key: LicenseKey, now: datetime) -> None:
        """
        Check the ban and expiration rules.

        Raises:
            KeyBannedError: If the key is banned
            KeyExpiredError: If now is past the expiration
        """
        if license_key.banned:
            raise KeyBannedError()
        if license_key.is_expired(now):
            raise KeyExpiredError()

    @staticmethod
    async def validate(
        api_key: str,
        key: str,
        hwid: str,
        system_info: Optional[str],
        application_repository: ApplicationRepository,
        license_key_repository: LicenseKeyRepository,
        device_binding_repository: DeviceBindingRepository,
        now: Optional[datetime] = None,
    ) -> Tuple[LicenseKey, bool]:
        """
        Validate a key for a device and bind the device when needed.

        Args:
            api_key: Application API key
            key: Key string
            hwid: Hardware id
            system_info: Optional client description
            application_repository: Application repository
            license_key_repository: License key repository
            device_binding_repository: Device binding repository
            now: Evaluation time

        Returns:
            Tuple of (LicenseKey after binding, newly_bound)

        Raises:
            RedemptionRejectedError: Subclass naming the failed rule
        """
        now = now or datetime.now(timezone.utc)

        application = await application_repository.find_by_api_key(api_key)
        if not application:
            raise InvalidApplicationError()

        license_key = await license_key_repository.find_by_key(api_key, key)
        if not license_key:
            raise InvalidKeyError()

        DeviceBindingValidator.ensure_redeemable(license_key, now)

        if license_key.has_device(hwid):
            return license_key, False

        # Limit check and append run under the key's row lock
        return await device_binding_repository.bind(api_key, key, hwid, system_info, now)
