"""
Support domain services.

The permission resolver gates every mutating operation on an
application or its keys.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from applications.ports.application_repository import ApplicationRepository
from core.domain.exceptions import PermissionDeniedError
from support.ports.support_repository import SupportRepository

if TYPE_CHECKING:
    from support.application.services.support_cache_service import SupportCacheService


@dataclass(frozen=True)
class PermissionGrant:
    """Result of a permission check."""

    has_permission: bool
    is_admin: bool


class PermissionResolver:
    """
    Three-tier permission hierarchy.

    Rules, first match wins:
    1. The super-admin has full permission and is admin.
    2. Support staff have full permission.
    3. Anyone else needs to own the application with the given API key.
    """

    def __init__(
        self,
        support_repository: SupportRepository,
        application_repository: ApplicationRepository,
        super_admin_id: str,
        support_cache: Optional["SupportCacheService"] = None,
    ):
        self.support_repository = support_repository
        self.application_repository = application_repository
        self.super_admin_id = super_admin_id
        self.support_cache = support_cache

    def is_admin(self, user_id: str) -> bool:
        """Check whether user_id is the super-admin."""
        return user_id == self.super_admin_id

    async def is_support(self, user_id: str) -> bool:
        """Check support membership, through the cache when configured."""
        if self.support_cache is not None:
            cached = await self.support_cache.get_membership(user_id)
            if cached is not None:
                return cached

        member = await self.support_repository.is_support(user_id)

        if self.support_cache is not None:
            await self.support_cache.set_membership(user_id, member)
        return member

    async def is_staff(self, user_id: str) -> bool:
        """Check whether user_id is the super-admin or support staff."""
        return self.is_admin(user_id) or await self.is_support(user_id)

    async def resolve(self, user_id: str, api_key: str) -> PermissionGrant:
        """
        Resolve what user_id may do on the application keyed by api_key.

        Args:
            user_id: Caller identity
            api_key: Target application API key (may be empty)

        Returns:
            PermissionGrant
        """
        if self.is_admin(user_id):
            return PermissionGrant(has_permission=True, is_admin=True)

        if await self.is_support(user_id):
            return PermissionGrant(has_permission=True, is_admin=False)

        if not api_key:
            return PermissionGrant(has_permission=False, is_admin=False)

        owns = await self.application_repository.is_owned_by(api_key, user_id)
        return PermissionGrant(has_permission=owns, is_admin=False)

    async def require(self, user_id: str, api_key: str) -> PermissionGrant:
        """
        Resolve permission and raise when it is denied.

        Raises:
            PermissionDeniedError: If user_id may not act on the application
        """
        grant = await self.resolve(user_id, api_key)
        if not grant.has_permission:
            raise PermissionDeniedError()
        return grant
