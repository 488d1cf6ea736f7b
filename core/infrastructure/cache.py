"""
Cache port.

Keys are namespaced as "<namespace>:<...>"; adapters label hit and
miss metrics with the namespace. Values must be picklable, and a
cached None is indistinguishable from a miss.
"""
from abc import ABC, abstractmethod
from typing import Any, Optional


class CachePort(ABC):
    """Async key/value cache used for short-lived lookups."""

    @abstractmethod
    async def get(self, key: str) -> Optional[Any]:
        """Return the cached value, or None on a miss or backend failure."""

    @abstractmethod
    async def set(self, key: str, value: Any, timeout: Optional[int] = None) -> None:
        """
        Store a value.

        Args:
            key: Namespaced cache key
            value: Value to cache (False is a valid value)
            timeout: Lifetime in seconds, None for the backend default
        """

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Drop a key; deleting an absent key is not an error."""
