"""
Support repository port (interface).

This defines the contract for support grant persistence.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from support.domain.support_grant import SupportGrant


class SupportRepository(ABC):
    """Abstract repository for SupportGrant entities."""

    @abstractmethod
    async def add(self, grant: SupportGrant) -> SupportGrant:
        """
        Insert a support grant.

        Args:
            grant: SupportGrant entity

        Returns:
            Saved SupportGrant

        Raises:
            DuplicateSupportError: If the user is already support staff
        """
        pass

    @abstractmethod
    async def ensure(self, grant: SupportGrant) -> None:
        """
        Insert a support grant, ignoring an existing one for the same user.

        Args:
            grant: SupportGrant entity
        """
        pass

    @abstractmethod
    async def remove(self, user_id: str) -> bool:
        """
        Remove the grant of user_id.

        Returns:
            True if a grant was removed
        """
        pass

    @abstractmethod
    async def find_by_user_id(self, user_id: str) -> Optional[SupportGrant]:
        """Find the grant of user_id, or None."""
        pass

    @abstractmethod
    async def is_support(self, user_id: str) -> bool:
        """Check whether user_id holds a grant."""
        pass

    @abstractmethod
    async def list_all(self) -> List[SupportGrant]:
        """List all grants, newest first."""
        pass
