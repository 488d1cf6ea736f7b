"""
Device binding repository port (interface).
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional, Tuple

from licenses.domain.license_key import LicenseKey


class DeviceBindingRepository(ABC):
    """Abstract repository for hardware id bindings."""

    @abstractmethod
    async def bind(
        self,
        api_key: str,
        key: str,
        hwid: str,
        system_info: Optional[str],
        now: datetime,
    ) -> Tuple[LicenseKey, bool]:
        """
        Bind hwid to a key as one atomic unit.

        The key is re-read under a row lock; ban and expiration are
        checked again, then the device limit.

        Args:
            api_key: Application API key
            key: Key string
            hwid: Hardware id
            system_info: Optional client description
            now: Binding time

        Returns:
            Tuple of (LicenseKey after binding, newly_bound)

        Raises:
            InvalidKeyError: If the key vanished
            KeyBannedError: If the key was banned meanwhile
            KeyExpiredError: If the key expired meanwhile
            DeviceLimitReachedError: If no device slot is free
        """
        pass
