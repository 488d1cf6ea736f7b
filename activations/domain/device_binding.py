"""
DeviceBinding domain entity.
"""

import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from core.domain.value_objects import HardwareId


@dataclass(frozen=True)
class DeviceBinding:
    """
    A hardware id bound to a key.

    A key holds at most one binding per hardware id.
    """

    id: uuid.UUID
    license_key_id: uuid.UUID
    hwid: HardwareId
    bound_at: datetime

    @classmethod
    def create(
        cls,
        license_key_id: uuid.UUID,
        hwid: str,
        bound_at: Optional[datetime] = None,
        binding_id: Optional[uuid.UUID] = None,
    ) -> "DeviceBinding":
        """
        Create a new DeviceBinding entity.

        Args:
            license_key_id: Key UUID
            hwid: Hardware id reported by the client
            bound_at: Binding time (now if not provided)
            binding_id: Optional UUID (generated if not provided)

        Returns:
            DeviceBinding entity instance
        """
        return cls(
            id=binding_id or uuid.uuid4(),
            license_key_id=license_key_id,
            hwid=HardwareId(hwid),
            bound_at=bound_at or datetime.now(timezone.utc),
        )
