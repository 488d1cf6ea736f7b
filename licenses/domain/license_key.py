"""
LicenseKey domain entity.

This is the core domain entity representing an issued key.
It contains business logic and is independent of infrastructure.
"""

import secrets
import string
import uuid
from dataclasses import dataclass, replace
from datetime import datetime, timedelta, timezone
from typing import Any, Optional, Tuple

from core.domain.exceptions import DeviceLimitReachedError
from core.domain.value_objects import HardwareId, KeyPrefix

KEY_SUFFIX_ALPHABET = string.ascii_uppercase + string.digits
DEFAULT_SUFFIX_LENGTH = 6
DEFAULT_DEVICE_LIMIT = 1
# Upper bound of the device_limit column
MAX_DEVICE_LIMIT = 2147483647
# Keeps expires_at inside the datetime range
MAX_LIFETIME_DAYS = 365000


def generate_key(prefix: str, suffix_length: int = DEFAULT_SUFFIX_LENGTH) -> str:
    """
    Generate a key string in format: PREFIX-XXXXXX.

    Args:
        prefix: Display prefix (e.g., 'PRO')
        suffix_length: Number of random A-Z0-9 characters

    Returns:
        Generated key string
    """
    suffix = "".join(secrets.choice(KEY_SUFFIX_ALPHABET) for _ in range(suffix_length))
    return f"{prefix}-{suffix}"


def parse_device_limit(value: Any) -> int:
    """
    Parse a requested device limit.

    Absent, unparseable, non-finite and non-positive values fall back
    to 1. Values above MAX_DEVICE_LIMIT are returned as parsed; callers
    reject them.
    """
    if value is None or isinstance(value, bool):
        return DEFAULT_DEVICE_LIMIT
    try:
        limit = int(float(str(value).strip()))
    except (TypeError, ValueError, OverflowError):
        return DEFAULT_DEVICE_LIMIT
    return limit if limit > 0 else DEFAULT_DEVICE_LIMIT


@dataclass(frozen=True)
class LicenseKey:
    """
    LicenseKey domain entity.

    Belongs to exactly one application (by API key). The number of
    bound hardware ids never exceeds device_limit.
    This is an immutable value object with business logic.
    """

    id: uuid.UUID
    key: str
    api_key: str
    prefix: str
    created_at: datetime
    expires_at: datetime
    banned: bool = False
    used: bool = False
    device_limit: int = DEFAULT_DEVICE_LIMIT
    system_info: Optional[str] = None
    first_used: Optional[datetime] = None
    hwids: Tuple[str, ...] = ()

    def __post_init__(self):
        """Validate license key entity."""
        if not self.key or len(self.key.strip()) == 0:
            raise ValueError("License key cannot be empty")
        if len(self.key) > 100:
            raise ValueError("License key too long")
        if not self.api_key:
            raise ValueError("Application API key is required")
        if self.device_limit < 1:
            raise ValueError("Device limit must be at least 1")
        if self.device_limit > MAX_DEVICE_LIMIT:
            raise ValueError("Device limit too large")
        if len(self.hwids) > self.device_limit:
            raise ValueError("Bound devices exceed the device limit")

    @classmethod
    def create(
        cls,
        api_key: str,
        prefix: str,
        lifetime_days: float,
        device_limit: Any = None,
        suffix_length: int = DEFAULT_SUFFIX_LENGTH,
        license_key_id: Optional[uuid.UUID] = None,
    ) -> "LicenseKey":
        """
        Create a new LicenseKey entity.

        Args:
            api_key: Owning application API key
            prefix: Display prefix for key generation
            lifetime_days: Lifetime in days, fractions allowed
            device_limit: Requested device limit (parsed, defaults to 1)
            suffix_length: Random suffix length
            license_key_id: Optional UUID (generated if not provided)

        Returns:
            LicenseKey entity instance
        """
        display_prefix = str(KeyPrefix(prefix))
        now = datetime.now(timezone.utc)

        return cls(
            id=license_key_id or uuid.uuid4(),
            key=generate_key(display_prefix, suffix_length),
            api_key=api_key,
            prefix=display_prefix,
            created_at=now,
            expires_at=now + timedelta(days=float(lifetime_days)),
            device_limit=parse_device_limit(device_limit),
        )

    @property
    def device_count(self) -> int:
        return len(self.hwids)

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        """A key is valid up to and including its expiration instant."""
        now = now or datetime.now(timezone.utc)
        return now > self.expires_at

    def has_device(self, hwid: str) -> bool:
        return hwid in self.hwids

    def has_free_slot(self) -> bool:
        return len(self.hwids) < self.device_limit

    def bind_device(
        self,
        hwid: str,
        system_info: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> "LicenseKey":
        """
        Bind a new hardware id.

        Args:
            hwid: Hardware id, not yet bound
            system_info: Optional client description, kept when not given
            now: Binding time

        Returns:
            Updated LicenseKey entity

        Raises:
            DeviceLimitReachedError: If no device slot is free
        """
        hardware_id = str(HardwareId(hwid))
        if self.has_device(hardware_id):
            return self
        if not self.has_free_slot():
            raise DeviceLimitReachedError()

        now = now or datetime.now(timezone.utc)
        return replace(
            self,
            hwids=self.hwids + (hardware_id,),
            used=True,
            system_info=system_info if system_info else self.system_info,
            first_used=self.first_used or now,
        )

    def reset_devices(self) -> "LicenseKey":
        """
        Clear bound devices and usage state.

        Returns:
            LicenseKey entity that validates like a fresh key
        """
        return replace(self, hwids=(), used=False, system_info=None, first_used=None)

    def ban(self) -> "LicenseKey":
        """Banning is permanent and idempotent."""
        return replace(self, banned=True)
