"""
Process-wide service state.

Holds the repositories, the permission resolver and the service
configuration, and runs the one-time bootstrap on first use.
"""

import logging
import threading
from typing import Optional

from asgiref.sync import async_to_sync
from django.db import connection, connections

from activations.infrastructure.repositories.django_device_binding_repository import (
    DjangoDeviceBindingRepository,
)
from applications.domain.services import ApplicationQuota
from applications.infrastructure.repositories.django_application_repository import (
    DjangoApplicationRepository,
)
from core.config import ServiceConfig
from licenses.infrastructure.repositories.django_license_key_repository import (
    DjangoLicenseKeyRepository,
)
from support.application.services.support_cache_service import SupportCacheService
from support.domain.services import PermissionResolver
from support.domain.support_grant import SYSTEM_GRANTOR, SupportGrant
from support.infrastructure.repositories.django_support_repository import (
    DjangoSupportRepository,
)

logger = logging.getLogger(__name__)


class ServiceState:
    """
    Service state with an init-once / shutdown lifecycle.

    ensure_initialized() verifies datastore connectivity and seeds the
    super-admin support grant. It runs at most once per process until
    shutdown() clears the flag.
    """

    def __init__(self, config: Optional[ServiceConfig] = None):
        self._explicit_config = config
        self._config = config
        self._lock = threading.Lock()
        self._initialized = False
        self.application_repository = DjangoApplicationRepository()
        self.license_key_repository = DjangoLicenseKeyRepository()
        self.device_binding_repository = DjangoDeviceBindingRepository()
        self.support_repository = DjangoSupportRepository()
        self._resolver: Optional[PermissionResolver] = None
        self._support_cache: Optional[SupportCacheService] = None

    @property
    def config(self) -> ServiceConfig:
        if self._config is None:
            self._config = ServiceConfig.from_settings()
        return self._config

    @property
    def support_cache(self) -> SupportCacheService:
        if self._support_cache is None:
            self._support_cache = SupportCacheService(ttl=self.config.support_cache_ttl)
        return self._support_cache

    @property
    def permission_resolver(self) -> PermissionResolver:
        if self._resolver is None:
            self._resolver = PermissionResolver(
                support_repository=self.support_repository,
                application_repository=self.application_repository,
                super_admin_id=self.config.super_admin_id,
                support_cache=self.support_cache,
            )
        return self._resolver

    @property
    def quota(self) -> ApplicationQuota:
        return ApplicationQuota(
            max_apps_per_owner=self.config.max_apps_per_owner,
            admin_allowance=self.config.admin_app_allowance,
        )

    @property
    def initialized(self) -> bool:
        return self._initialized

    def ensure_initialized(self) -> None:
        """
        Run the one-time bootstrap.

        Must be called from synchronous code; the seed uses
        insert-or-ignore so concurrent processes may race.
        """
        if self._initialized:
            return
        with self._lock:
            if self._initialized:
                return
            with connection.cursor() as cursor:
                cursor.execute("SELECT 1")
            self.seed_super_admin()
            self._initialized = True
            logger.info(
                "Service state initialized",
                extra={"super_admin_id": self.config.super_admin_id},
            )

    def seed_super_admin(self) -> None:
        """Insert the super-admin support grant unless present."""
        grant = SupportGrant.create(user_id=self.config.super_admin_id, added_by=SYSTEM_GRANTOR)
        async_to_sync(self.support_repository.ensure)(grant)

    def reset(self) -> None:
        """Clear the initialized flag and the derived collaborators."""
        with self._lock:
            self._initialized = False
            self._resolver = None
            self._support_cache = None
            self._config = self._explicit_config

    def shutdown(self) -> None:
        """Close datastore connections and clear the initialized flag."""
        connections.close_all()
        self.reset()
        logger.info("Service state shut down")


# Global service state instance
service_state = ServiceState()
