"""
Cache adapter implementations.

Provides the Django cache framework implementation of CachePort.
"""

import logging
from typing import Any, Optional

from asgiref.sync import sync_to_async
from django.core.cache import cache

from core.infrastructure.cache import CachePort
from core.metrics import cache_hits_total, cache_misses_total

logger = logging.getLogger(__name__)


def _namespace(key: str) -> str:
    return key.split(":", 1)[0]


class DjangoCacheAdapter(CachePort):
    """
    Django cache adapter implementing CachePort.

    Backend failures are logged and treated as misses so that
    a cache outage never fails a request.
    """

    async def get(self, key: str) -> Optional[Any]:
        try:
            value = await sync_to_async(cache.get)(key)
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.error("Cache read failed for %s: %s", key, e, exc_info=True)
            return None

        counter = cache_misses_total if value is None else cache_hits_total
        counter.labels(cache_key=_namespace(key)).inc()
        return value

    async def set(self, key: str, value: Any, timeout: Optional[int] = None) -> None:
        try:
            await sync_to_async(cache.set)(key, value, timeout=timeout)
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.error("Cache write failed for %s: %s", key, e, exc_info=True)

    async def delete(self, key: str) -> None:
        try:
            await sync_to_async(cache.delete)(key)
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.error("Cache delete failed for %s: %s", key, e, exc_info=True)


# Global cache instance
cache_adapter = DjangoCacheAdapter()
