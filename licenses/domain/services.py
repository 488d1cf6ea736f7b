"""
License domain services.

Domain services contain business logic that doesn't naturally
fit within a single entity.
"""
import logging
from typing import Any

from core.domain.exceptions import DuplicateLicenseKeyError, LicenseKeyNotFoundError
from licenses.domain.license_key import DEFAULT_SUFFIX_LENGTH, LicenseKey

logger = logging.getLogger(__name__)


class KeyLifecycleManager:
    """Domain service for issuing and administering keys."""

    @staticmethod
    async def issue(
        api_key: str,
        prefix: str,
        lifetime_days: float,
        device_limit: Any,
        repository: "LicenseKeyRepository",  # noqa: F821
        suffix_length: int = DEFAULT_SUFFIX_LENGTH,
        attempts: int = 3,
    ) -> LicenseKey:
        """
        Issue a key, regenerating the random suffix on a collision.

        Args:
            api_key: Owning application API key
            prefix: Display prefix
            lifetime_days: Lifetime in days
            device_limit: Requested device limit
            repository: License key repository
            suffix_length: Random suffix length
            attempts: Number of generation attempts

        Returns:
            Saved LicenseKey entity

        Raises:
            DuplicateLicenseKeyError: If every attempt collided
        """
        for attempt in range(1, attempts + 1):
            candidate = LicenseKey.create(
                api_key=api_key,
                prefix=prefix,
                lifetime_days=lifetime_days,
                device_limit=device_limit,
                suffix_length=suffix_length,
            )
            try:
                return await repository.save(candidate)
            except DuplicateLicenseKeyError:
                logger.warning(
                    "Generated key collided, regenerating",
                    extra={"prefix": prefix, "attempt": attempt},
                )
        raise DuplicateLicenseKeyError(f"Could not generate a unique key after {attempts} attempts")

    @staticmethod
    async def ban(
        api_key: str,
        key: str,
        repository: "LicenseKeyRepository",  # noqa: F821
    ) -> None:
        """
        Ban a key. Banning an already banned key succeeds.

        Raises:
            LicenseKeyNotFoundError: If no key matches key + api_key
        """
        if not await repository.mark_banned(api_key, key):
            raise LicenseKeyNotFoundError()

    @staticmethod
    async def delete(
        api_key: str,
        key: str,
        repository: "LicenseKeyRepository",  # noqa: F821
    ) -> None:
        """
        Delete a key and its device bindings.

        Raises:
            LicenseKeyNotFoundError: If no key matches key + api_key
        """
        if not await repository.delete(api_key, key):
            raise LicenseKeyNotFoundError()

    @staticmethod
    async def reset_devices(
        api_key: str,
        key: str,
        repository: "LicenseKeyRepository",  # noqa: F821
    ) -> None:
        """
        Clear a key's device bindings, used flag, system info and first use.

        Raises:
            LicenseKeyNotFoundError: If no key matches key + api_key
        """
        if not await repository.reset_devices(api_key, key):
            raise LicenseKeyNotFoundError()
