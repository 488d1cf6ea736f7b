"""
Activation domain events.
"""

import uuid
from dataclasses import dataclass

from core.domain.events import DomainEvent


@dataclass(frozen=True, kw_only=True)
class DeviceBound(DomainEvent):
    """Event raised when a new hardware id is bound to a key."""

    license_key_id: uuid.UUID
    key: str
    hwid: str
    device_count: int
    device_limit: int

    @property
    def aggregate_id(self) -> str:
        return str(self.license_key_id)
