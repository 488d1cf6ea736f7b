"""
Django implementation of DeviceBindingRepository port.

The bind operation locks the key row so concurrent redemptions of
the same key serialize on the device limit check.
"""
from datetime import datetime
from typing import Optional, Tuple

from asgiref.sync import sync_to_async
from django.db import transaction

from activations.domain.device_binding import DeviceBinding
from activations.domain.services import DeviceBindingValidator
from activations.infrastructure.models import DeviceBinding as DeviceBindingModel
from activations.ports.device_binding_repository import DeviceBindingRepository
from core.domain.exceptions import InvalidKeyError
from licenses.domain.license_key import LicenseKey
from licenses.infrastructure.models import LicenseKey as LicenseKeyModel
from licenses.infrastructure.repositories.django_license_key_repository import (
    DjangoLicenseKeyRepository,
)


class DjangoDeviceBindingRepository(DeviceBindingRepository):
    """Django ORM implementation of DeviceBindingRepository."""

    def __init__(self):
        self._keys = DjangoLicenseKeyRepository()

    def _to_model(
        self, binding: DeviceBinding, license_key: LicenseKeyModel
    ) -> DeviceBindingModel:
        return DeviceBindingModel(
            id=binding.id,
            license_key=license_key,
            hwid=str(binding.hwid),
            bound_at=binding.bound_at,
        )

    @sync_to_async
    def bind(
        self,
        api_key: str,
        key: str,
        hwid: str,
        system_info: Optional[str],
        now: datetime,
    ) -> Tuple[LicenseKey, bool]:
        """
        Bind hwid to a key under a row lock.

        Args:
            api_key: Application API key
            key: Key string
            hwid: Hardware id
            system_info: Optional client description
            now: Binding time

        Returns:
            Tuple of (LicenseKey after binding, newly_bound)
        """
        with transaction.atomic():
            model = (
                LicenseKeyModel.objects.select_for_update()
                .filter(application_id=api_key, key=key)
                .first()
            )
            if model is None:
                raise InvalidKeyError()

            current = self._keys._to_domain(model)
            DeviceBindingValidator.ensure_redeemable(current, now)
            if current.has_device(hwid):
                return current, False

            # Raises DeviceLimitReachedError when every slot is taken
            updated = current.bind_device(hwid, system_info, now)

            binding = DeviceBinding.create(license_key_id=model.id, hwid=hwid, bound_at=now)
            self._to_model(binding, model).save(force_insert=True)
            model.used = updated.used
            model.system_info = updated.system_info
            model.first_used = updated.first_used
            model.save(update_fields=["used", "system_info", "first_used"])

        return updated, True
