"""
Pytest configuration and shared fixtures.
"""

from typing import Dict, List, Optional

import pytest
from asgiref.sync import async_to_sync
from django.core.cache import cache

from activations.infrastructure.repositories.django_device_binding_repository import (
    DjangoDeviceBindingRepository,
)
from activations.ports.device_binding_repository import DeviceBindingRepository
from api.state import service_state
from applications.domain.application import Application
from applications.domain.services import ApplicationQuota
from applications.infrastructure.repositories.django_application_repository import (
    DjangoApplicationRepository,
)
from applications.ports.application_repository import ApplicationRepository
from core.domain.exceptions import (
    DuplicateApplicationNameError,
    DuplicateLicenseKeyError,
    DuplicateSupportError,
    InvalidKeyError,
)
from licenses.domain.license_key import LicenseKey
from licenses.infrastructure.repositories.django_license_key_repository import (
    DjangoLicenseKeyRepository,
)
from licenses.ports.license_key_repository import LicenseKeyRepository
from support.domain.services import PermissionResolver
from support.domain.support_grant import SupportGrant
from support.infrastructure.repositories.django_support_repository import (
    DjangoSupportRepository,
)
from support.ports.support_repository import SupportRepository

SUPER_ADMIN_ID = "root-admin"


class InMemoryApplicationRepository(ApplicationRepository):
    """Dictionary-backed ApplicationRepository."""

    def __init__(self):
        self.applications: Dict[str, Application] = {}
        self.key_counts: Dict[str, int] = {}

    async def save(self, application):
        if application.name in {app.name for app in self.applications.values()}:
            raise DuplicateApplicationNameError()
        self.applications[application.api_key] = application
        return application

    async def find_by_name(self, name):
        return next((a for a in self.applications.values() if a.name == name), None)

    async def find_by_api_key(self, api_key):
        return self.applications.get(api_key)

    async def is_owned_by(self, api_key, owner_id):
        application = self.applications.get(api_key)
        return application is not None and application.created_by == owner_id

    async def count_by_owner(self, owner_id):
        return len([a for a in self.applications.values() if a.created_by == owner_id])

    async def list_by_owner(self, owner_id):
        return [a for a in self.applications.values() if a.created_by == owner_id]

    async def list_with_key_counts(self, owner_id=None):
        return [
            (a, self.key_counts.get(a.api_key, 0))
            for a in self.applications.values()
            if owner_id is None or a.created_by == owner_id
        ]

    async def delete(self, application_id):
        for api_key, application in list(self.applications.items()):
            if application.id == application_id:
                del self.applications[api_key]
                return True
        return False


class InMemoryLicenseKeyRepository(LicenseKeyRepository):
    """Dictionary-backed LicenseKeyRepository keyed by key string."""

    def __init__(self):
        self.keys: Dict[str, LicenseKey] = {}
        self.save_calls = 0

    async def save(self, license_key):
        self.save_calls += 1
        if license_key.key in self.keys:
            raise DuplicateLicenseKeyError()
        self.keys[license_key.key] = license_key
        return license_key

    async def find_by_key(self, api_key, key):
        license_key = self.keys.get(key)
        if license_key is None or license_key.api_key != api_key:
            return None
        return license_key

    async def list_by_application(self, api_key):
        return [k for k in self.keys.values() if k.api_key == api_key]

    async def mark_banned(self, api_key, key):
        license_key = await self.find_by_key(api_key, key)
        if license_key is None:
            return False
        self.keys[key] = license_key.ban()
        return True

    async def delete(self, api_key, key):
        if await self.find_by_key(api_key, key) is None:
            return False
        del self.keys[key]
        return True

    async def reset_devices(self, api_key, key):
        license_key = await self.find_by_key(api_key, key)
        if license_key is None:
            return False
        self.keys[key] = license_key.reset_devices()
        return True


class InMemoryDeviceBindingRepository(DeviceBindingRepository):
    """Binds devices on the keys held by an InMemoryLicenseKeyRepository."""

    def __init__(self, license_key_repository: InMemoryLicenseKeyRepository):
        self.license_key_repository = license_key_repository

    async def bind(self, api_key, key, hwid, system_info, now):
        current = await self.license_key_repository.find_by_key(api_key, key)
        if current is None:
            raise InvalidKeyError()
        if current.has_device(hwid):
            return current, False
        updated = current.bind_device(hwid, system_info, now)
        self.license_key_repository.keys[key] = updated
        return updated, True


class InMemorySupportRepository(SupportRepository):
    """Dictionary-backed SupportRepository."""

    def __init__(self):
        self.grants: Dict[str, SupportGrant] = {}
        self.lookups: List[str] = []

    async def add(self, grant):
        if grant.user_id in self.grants:
            raise DuplicateSupportError()
        self.grants[grant.user_id] = grant
        return grant

    async def ensure(self, grant):
        self.grants.setdefault(grant.user_id, grant)

    async def remove(self, user_id):
        return self.grants.pop(user_id, None) is not None

    async def find_by_user_id(self, user_id) -> Optional[SupportGrant]:
        return self.grants.get(user_id)

    async def is_support(self, user_id):
        self.lookups.append(user_id)
        return user_id in self.grants

    async def list_all(self):
        return list(self.grants.values())


@pytest.fixture(autouse=True)
def reset_service_state():
    """Every test starts with an uninitialized service and an empty cache."""
    service_state.reset()
    cache.clear()
    yield
    service_state.reset()
    cache.clear()


# In-memory fakes


@pytest.fixture
def memory_application_repository():
    """Fixture for an in-memory ApplicationRepository."""
    return InMemoryApplicationRepository()


@pytest.fixture
def memory_license_key_repository():
    """Fixture for an in-memory LicenseKeyRepository."""
    return InMemoryLicenseKeyRepository()


@pytest.fixture
def memory_device_binding_repository(memory_license_key_repository):
    """Fixture for an in-memory DeviceBindingRepository."""
    return InMemoryDeviceBindingRepository(memory_license_key_repository)


@pytest.fixture
def memory_support_repository():
    """Fixture for an in-memory SupportRepository."""
    return InMemorySupportRepository()


@pytest.fixture
def memory_resolver(memory_support_repository, memory_application_repository):
    """PermissionResolver over the in-memory repositories, without cache."""
    return PermissionResolver(
        support_repository=memory_support_repository,
        application_repository=memory_application_repository,
        super_admin_id=SUPER_ADMIN_ID,
    )


@pytest.fixture
def quota():
    """Fixture for the default application quota."""
    return ApplicationQuota(max_apps_per_owner=10, admin_allowance=999)


# Django repositories


@pytest.fixture
def application_repository():
    """Fixture for ApplicationRepository."""
    return DjangoApplicationRepository()


@pytest.fixture
def license_key_repository():
    """Fixture for LicenseKeyRepository."""
    return DjangoLicenseKeyRepository()


@pytest.fixture
def device_binding_repository():
    """Fixture for DeviceBindingRepository."""
    return DjangoDeviceBindingRepository()


@pytest.fixture
def support_repository():
    """Fixture for SupportRepository."""
    return DjangoSupportRepository()


@pytest.fixture
def db_application(db, application_repository):
    """Fixture for an Application saved in database."""
    application = Application.create(name="Launcher", owner_id="owner-1")
    return async_to_sync(application_repository.save)(application)


@pytest.fixture
def db_license_key(db, db_application, license_key_repository):
    """Fixture for a two-device LicenseKey saved in database."""
    license_key = LicenseKey.create(
        api_key=db_application.api_key,
        prefix="PRO",
        lifetime_days=30,
        device_limit=2,
    )
    return async_to_sync(license_key_repository.save)(license_key)


@pytest.fixture
def api_client():
    """Fixture for DRF API client."""
    from rest_framework.test import APIClient

    return APIClient()


@pytest.fixture
def call_action(api_client):
    """POST an action to the API endpoint and return the response."""

    def _call(action, **fields):
        return api_client.post("/api/", {"action": action, **fields}, format="json")

    return _call
