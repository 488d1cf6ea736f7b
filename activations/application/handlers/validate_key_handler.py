"""
ValidateKeyHandler.

Handles key redemption from end-user clients.
"""
import logging

from activations.application.commands.validate_key import ValidateKeyCommand
from activations.application.dto.validation_dto import ValidationResultDTO
from activations.domain.events import DeviceBound
from activations.domain.services import DeviceBindingValidator
from activations.ports.device_binding_repository import DeviceBindingRepository
from applications.ports.application_repository import ApplicationRepository
from core.domain.exceptions import RedemptionRejectedError
from core.domain.value_objects import ValidationReason
from core.infrastructure.events import event_bus
from core.metrics import key_validations_total
from licenses.ports.license_key_repository import LicenseKeyRepository

logger = logging.getLogger(__name__)

VALID_MESSAGE = "Valid key"


class ValidateKeyHandler:
    """Handler for ValidateKeyCommand."""

    def __init__(
        self,
        application_repository: ApplicationRepository,
        license_key_repository: LicenseKeyRepository,
        device_binding_repository: DeviceBindingRepository,
    ):
        """Initialize handler with repositories."""
        self.application_repository = application_repository
        self.license_key_repository = license_key_repository
        self.device_binding_repository = device_binding_repository

    async def handle(self, command: ValidateKeyCommand) -> ValidationResultDTO:
        """
        Handle validate key command.

        Rejections are expected outcomes and are returned, not raised.

        Args:
            command: ValidateKeyCommand

        Returns:
            ValidationResultDTO with the outcome reason
        """
        try:
            license_key, newly_bound = await DeviceBindingValidator.validate(
                api_key=command.api_key,
                key=command.key,
                hwid=command.hwid,
                system_info=command.system_info,
                application_repository=self.application_repository,
                license_key_repository=self.license_key_repository,
                device_binding_repository=self.device_binding_repository,
            )
        except RedemptionRejectedError as e:
            key_validations_total.labels(reason=e.code).inc()
            logger.info(
                "Key validation rejected",
                extra={"reason": e.code, "key_prefix": command.key.split("-", 1)[0]},
            )
            return ValidationResultDTO(accepted=False, reason=e.code, message=e.message)

        key_validations_total.labels(reason=ValidationReason.VALID.value).inc()

        if newly_bound:
            await event_bus.publish(
                DeviceBound(
                    license_key_id=license_key.id,
                    key=license_key.key,
                    hwid=command.hwid,
                    device_count=license_key.device_count,
                    device_limit=license_key.device_limit,
                )
            )

        return ValidationResultDTO(
            accepted=True,
            reason=ValidationReason.VALID.value,
            message=VALID_MESSAGE,
        )
