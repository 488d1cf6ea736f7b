"""
SupportGrant domain entity.
"""

import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

SYSTEM_GRANTOR = "system"


@dataclass(frozen=True)
class SupportGrant:
    """
    Marks a user id as support staff.

    Support staff may act on every application.
    """

    id: uuid.UUID
    user_id: str
    added_by: str
    added_at: datetime

    def __post_init__(self):
        """Validate support grant."""
        if not self.user_id or not self.user_id.strip():
            raise ValueError("User ID cannot be empty")
        if not self.added_by:
            raise ValueError("Grantor is required")

    @classmethod
    def create(
        cls,
        user_id: str,
        added_by: str,
        grant_id: Optional[uuid.UUID] = None,
    ) -> "SupportGrant":
        """
        Create a new SupportGrant entity.

        Args:
            user_id: User id being granted support rights
            added_by: Admin id (or "system" for the bootstrap seed)
            grant_id: Optional UUID (generated if not provided)

        Returns:
            SupportGrant entity instance
        """
        return cls(
            id=grant_id or uuid.uuid4(),
            user_id=user_id,
            added_by=added_by,
            added_at=datetime.now(timezone.utc),
        )
