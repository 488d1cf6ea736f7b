"""
License domain events.

Domain events represent something that happened in the key lifecycle.
"""

import uuid
from dataclasses import dataclass
from datetime import datetime

from core.domain.events import DomainEvent


@dataclass(frozen=True, kw_only=True)
class LicenseKeyCreated(DomainEvent):
    """Event raised when a key is issued."""

    license_key_id: uuid.UUID
    api_key: str
    prefix: str
    device_limit: int
    expires_at: datetime
    issued_by: str

    @property
    def aggregate_id(self) -> str:
        return str(self.license_key_id)


@dataclass(frozen=True, kw_only=True)
class LicenseKeyBanned(DomainEvent):
    """Event raised when a key is banned."""

    key: str
    api_key: str
    banned_by: str

    @property
    def aggregate_id(self) -> str:
        return self.key


@dataclass(frozen=True, kw_only=True)
class LicenseKeyDeleted(DomainEvent):
    """Event raised when a key is deleted."""

    key: str
    api_key: str
    deleted_by: str

    @property
    def aggregate_id(self) -> str:
        return self.key


@dataclass(frozen=True, kw_only=True)
class DevicesReset(DomainEvent):
    """Event raised when a key's HWID bindings are cleared."""

    key: str
    api_key: str
    reset_by: str

    @property
    def aggregate_id(self) -> str:
        return self.key
