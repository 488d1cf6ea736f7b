"""
Unit tests for PermissionResolver and the support cache.
"""

import pytest

from applications.domain.application import Application
from core.domain.exceptions import PermissionDeniedError
from support.application.services.support_cache_service import SupportCacheService
from support.domain.services import PermissionResolver
from support.domain.support_grant import SupportGrant


class DictCache:
    """CachePort over a plain dictionary."""

    def __init__(self):
        self.data = {}

    async def get(self, key):
        return self.data.get(key)

    async def set(self, key, value, timeout=None):
        self.data[key] = value

    async def delete(self, key):
        self.data.pop(key, None)


@pytest.mark.asyncio
class TestPermissionResolver:
    """Tests for the three-tier permission hierarchy."""

    async def test_admin(self, memory_resolver):
        """Test the super-admin has permission on any key, even an empty one."""
        grant = await memory_resolver.resolve("root-admin", "")
        assert grant.has_permission is True
        assert grant.is_admin is True

    async def test_support(self, memory_resolver, memory_support_repository):
        await memory_support_repository.add(SupportGrant.create("helper", "root-admin"))

        grant = await memory_resolver.resolve("helper", "api_anything")

        assert grant.has_permission is True
        assert grant.is_admin is False

    async def test_owner(self, memory_resolver, memory_application_repository):
        application = await memory_application_repository.save(
            Application.create(name="Launcher", owner_id="u1")
        )

        assert (await memory_resolver.resolve("u1", application.api_key)).has_permission
        assert not (await memory_resolver.resolve("u2", application.api_key)).has_permission

    async def test_empty_api_key_denied(self, memory_resolver):
        """Test ordinary users are denied without an API key."""
        grant = await memory_resolver.resolve("u1", "")
        assert grant.has_permission is False

    async def test_require_raises(self, memory_resolver):
        with pytest.raises(PermissionDeniedError):
            await memory_resolver.require("u1", "api_missing")

    async def test_staff(self, memory_resolver, memory_support_repository):
        await memory_support_repository.add(SupportGrant.create("helper", "root-admin"))
        assert await memory_resolver.is_staff("root-admin")
        assert await memory_resolver.is_staff("helper")
        assert not await memory_resolver.is_staff("u1")


@pytest.mark.asyncio
class TestSupportCache:
    """Tests for cached support membership."""

    async def test_membership_cached(self, memory_support_repository, memory_application_repository):
        """Test a repeated lookup is answered from the cache."""
        resolver = PermissionResolver(
            support_repository=memory_support_repository,
            application_repository=memory_application_repository,
            super_admin_id="root-admin",
            support_cache=SupportCacheService(ttl=60, cache=DictCache()),
        )

        assert await resolver.is_support("u1") is False
        assert await resolver.is_support("u1") is False
        assert memory_support_repository.lookups == ["u1"]

    async def test_invalidate(self, memory_support_repository, memory_application_repository):
        cache = SupportCacheService(ttl=60, cache=DictCache())
        resolver = PermissionResolver(
            support_repository=memory_support_repository,
            application_repository=memory_application_repository,
            super_admin_id="root-admin",
            support_cache=cache,
        )
        assert await resolver.is_support("u1") is False

        await memory_support_repository.add(SupportGrant.create("u1", "root-admin"))
        await cache.invalidate("u1")

        assert await resolver.is_support("u1") is True

    async def test_zero_ttl_disables_caching(self):
        backend = DictCache()
        cache = SupportCacheService(ttl=0, cache=backend)

        await cache.set_membership("u1", True)

        assert backend.data == {}
        assert await cache.get_membership("u1") is None
