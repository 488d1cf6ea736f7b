"""
Django implementation of LicenseKeyRepository port.

This adapter converts between domain entities and Django ORM models.
"""
from typing import List, Optional

from asgiref.sync import sync_to_async
from django.db import IntegrityError, transaction

from core.domain.exceptions import DuplicateLicenseKeyError
from licenses.domain.license_key import LicenseKey
from licenses.infrastructure.models import LicenseKey as LicenseKeyModel
from licenses.ports.license_key_repository import LicenseKeyRepository


class DjangoLicenseKeyRepository(LicenseKeyRepository):
    """
    Django ORM implementation of LicenseKeyRepository.

    This adapter:
    1. Converts Django models to domain entities
    2. Converts domain entities to Django models
    3. Implements repository interface
    """

    def _to_domain(self, model: LicenseKeyModel) -> LicenseKey:
        """
        Convert Django model to domain entity.

        Args:
            model: Django LicenseKey model, ideally with devices prefetched

        Returns:
            LicenseKey domain entity
        """
        return LicenseKey(
            id=model.id,
            key=model.key,
            api_key=model.application_id,
            prefix=model.prefix,
            created_at=model.created_at,
            expires_at=model.expires_at,
            banned=model.banned,
            used=model.used,
            device_limit=model.device_limit,
            system_info=model.system_info,
            first_used=model.first_used,
            hwids=tuple(device.hwid for device in model.devices.all()),
        )

    def _to_model(self, license_key: LicenseKey) -> LicenseKeyModel:
        """
        Convert domain entity to Django model.

        Args:
            license_key: LicenseKey domain entity

        Returns:
            Django LicenseKey model
        """
        return LicenseKeyModel(
            id=license_key.id,
            key=license_key.key,
            application_id=license_key.api_key,
            prefix=license_key.prefix,
            created_at=license_key.created_at,
            expires_at=license_key.expires_at,
            banned=license_key.banned,
            used=license_key.used,
            device_limit=license_key.device_limit,
            system_info=license_key.system_info,
            first_used=license_key.first_used,
        )

    def _scoped(self, api_key: str, key: str):
        return LicenseKeyModel.objects.filter(application_id=api_key, key=key)

    @sync_to_async
    def save(self, license_key: LicenseKey) -> LicenseKey:
        """
        Insert a new key.

        Args:
            license_key: LicenseKey entity to save

        Returns:
            Saved LicenseKey entity

        Raises:
            DuplicateLicenseKeyError: If the key string already exists
        """
        model = self._to_model(license_key)
        try:
            with transaction.atomic():
                model.save(force_insert=True)
        except IntegrityError as e:
            if LicenseKeyModel.objects.filter(key=license_key.key).exists():
                raise DuplicateLicenseKeyError() from e
            raise
        return license_key

    @sync_to_async
    def find_by_key(self, api_key: str, key: str) -> Optional[LicenseKey]:
        """
        Find a key within an application.

        Args:
            api_key: Application API key
            key: Key string

        Returns:
            LicenseKey entity or None if not found
        """
        model = self._scoped(api_key, key).prefetch_related("devices").first()
        if model is None:
            return None
        return self._to_domain(model)

    @sync_to_async
    def list_by_application(self, api_key: str) -> List[LicenseKey]:
        """
        List an application's keys, newest first.

        Args:
            api_key: Application API key

        Returns:
            List of LicenseKey entities
        """
        models = (
            LicenseKeyModel.objects.filter(application_id=api_key)
            .prefetch_related("devices")
            .order_by("-created_at")
        )
        return [self._to_domain(model) for model in models]

    @sync_to_async
    def mark_banned(self, api_key: str, key: str) -> bool:
        """Ban a key; banning a banned key succeeds again."""
        with transaction.atomic():
            model = self._scoped(api_key, key).select_for_update().first()
            if model is None:
                return False
            model.banned = self._to_domain(model).ban().banned
            model.save(update_fields=["banned"])
        return True

    @sync_to_async
    def delete(self, api_key: str, key: str) -> bool:
        deleted, _ = self._scoped(api_key, key).delete()
        return deleted > 0

    @sync_to_async
    def reset_devices(self, api_key: str, key: str) -> bool:
        """
        Clear bindings and usage state in one transaction.

        Args:
            api_key: Application API key
            key: Key string

        Returns:
            False when no key matched
        """
        with transaction.atomic():
            model = self._scoped(api_key, key).select_for_update().first()
            if model is None:
                return False
            cleared = self._to_domain(model).reset_devices()
            model.devices.all().delete()
            model.used = cleared.used
            model.system_info = cleared.system_info
            model.first_used = cleared.first_used
            model.save(update_fields=["used", "system_info", "first_used"])
        return True
