"""
Support cache service.

Caches support membership lookups made by the permission resolver.
"""
import logging
from typing import Optional

from core.infrastructure.cache import CachePort
from core.infrastructure.cache_adapters import cache_adapter

logger = logging.getLogger(__name__)

# Cache TTL (in seconds)
CACHE_TTL_SUPPORT_MEMBERSHIP = 60


class SupportCacheService:
    """Service for caching support membership."""

    def __init__(self, ttl: int = CACHE_TTL_SUPPORT_MEMBERSHIP, cache: CachePort = None):
        self.ttl = ttl
        self.cache = cache or cache_adapter

    @staticmethod
    def _membership_key(user_id: str) -> str:
        """Generate cache key for support membership."""
        return f"support:member:{user_id}"

    async def get_membership(self, user_id: str) -> Optional[bool]:
        """
        Get cached membership.

        Args:
            user_id: User id

        Returns:
            True/False when cached, None on a miss
        """
        cached = await self.cache.get(self._membership_key(user_id))
        if cached is None:
            return None
        return bool(cached)

    async def set_membership(self, user_id: str, is_support: bool) -> None:
        """Cache membership of user_id."""
        if self.ttl <= 0:
            return
        await self.cache.set(self._membership_key(user_id), is_support, timeout=self.ttl)

    async def invalidate(self, user_id: str) -> None:
        """
        Invalidate cached membership.

        Args:
            user_id: User id
        """
        await self.cache.delete(self._membership_key(user_id))
        logger.info("Invalidated support membership cache", extra={"user_id": user_id})
