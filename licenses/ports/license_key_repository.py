"""
License key repository port (interface).

This defines the contract for key persistence operations.
All lookups are scoped by the owning application's API key.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from licenses.domain.license_key import LicenseKey


class LicenseKeyRepository(ABC):
    """
    Abstract repository for LicenseKey entities.

    This is a port in hexagonal architecture - it defines
    what operations are available, not how they're implemented.
    """

    @abstractmethod
    async def save(self, license_key: LicenseKey) -> LicenseKey:
        """
        Insert a new key.

        Args:
            license_key: LicenseKey entity to save

        Returns:
            Saved LicenseKey entity

        Raises:
            DuplicateLicenseKeyError: If the key string already exists
        """
        pass

    @abstractmethod
    async def find_by_key(self, api_key: str, key: str) -> Optional[LicenseKey]:
        """
        Find a key within an application.

        Args:
            api_key: Application API key
            key: Key string

        Returns:
            LicenseKey entity (with bound HWIDs) or None if not found
        """
        pass

    @abstractmethod
    async def list_by_application(self, api_key: str) -> List[LicenseKey]:
        """
        List an application's keys, newest first.

        Args:
            api_key: Application API key

        Returns:
            List of LicenseKey entities
        """
        pass

    @abstractmethod
    async def mark_banned(self, api_key: str, key: str) -> bool:
        """Set the banned flag. Returns False when no key matched."""
        pass

    @abstractmethod
    async def delete(self, api_key: str, key: str) -> bool:
        """Delete a key. Returns False when no key matched."""
        pass

    @abstractmethod
    async def reset_devices(self, api_key: str, key: str) -> bool:
        """
        Clear bindings, used flag, system info and first-used time.

        Returns:
            False when no key matched
        """
        pass
