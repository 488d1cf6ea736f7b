"""
Application repository port (interface).

This defines the contract for application persistence operations.
Implementations are in the infrastructure layer.
"""

import uuid
from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from applications.domain.application import Application


class ApplicationRepository(ABC):
    """
    Abstract repository for Application entities.

    This is a port in hexagonal architecture - it defines
    what operations are available, not how they're implemented.
    """

    @abstractmethod
    async def save(self, application: Application) -> Application:
        """
        Save an application entity.

        Args:
            application: Application entity to save

        Returns:
            Saved application entity

        Raises:
            DuplicateApplicationNameError: If the name is already taken
        """
        pass

    @abstractmethod
    async def find_by_name(self, name: str) -> Optional[Application]:
        """
        Find an application by its unique name.

        Args:
            name: Application name

        Returns:
            Application entity or None if not found
        """
        pass

    @abstractmethod
    async def find_by_api_key(self, api_key: str) -> Optional[Application]:
        """
        Find an application by its API key.

        Args:
            api_key: Application API key

        Returns:
            Application entity or None if not found
        """
        pass

    @abstractmethod
    async def is_owned_by(self, api_key: str, owner_id: str) -> bool:
        """Check whether an application with api_key is owned by owner_id."""
        pass

    @abstractmethod
    async def count_by_owner(self, owner_id: str) -> int:
        """Count applications owned by owner_id."""
        pass

    @abstractmethod
    async def list_by_owner(self, owner_id: str) -> List[Application]:
        """
        List applications owned by owner_id, newest first.

        Args:
            owner_id: Owner user id

        Returns:
            List of Application entities
        """
        pass

    @abstractmethod
    async def list_with_key_counts(
        self, owner_id: Optional[str] = None
    ) -> List[Tuple[Application, int]]:
        """
        List applications with their live key counts, newest first.

        Args:
            owner_id: Restrict to this owner; all applications when None

        Returns:
            List of (Application, key_count) tuples
        """
        pass

    @abstractmethod
    async def delete(self, application_id: uuid.UUID) -> bool:
        """
        Delete an application and, by cascade, its keys.

        Args:
            application_id: Application UUID

        Returns:
            True if a row was deleted
        """
        pass
