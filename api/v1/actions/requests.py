"""
Action requests.

Each action has a serializer that validates the flat request fields
and builds the typed command or query the dispatcher routes on.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Type

from rest_framework import serializers

from activations.application.commands.validate_key import ValidateKeyCommand
from applications.application.commands.create_application import CreateApplicationCommand
from applications.application.commands.delete_application import DeleteApplicationCommand
from applications.application.queries.list_applications import (
    ListApplicationsQuery,
    ListOwnedApplicationsQuery,
)
from licenses.application.commands.key_commands import (
    BanKeyCommand,
    CreateKeyCommand,
    DeleteKeyCommand,
    ResetHwidCommand,
)
from licenses.application.queries.key_queries import GetKeyQuery, ListKeysQuery
from licenses.domain.license_key import MAX_DEVICE_LIMIT, MAX_LIFETIME_DAYS, parse_device_limit
from support.application.commands.support_commands import AddSupportCommand, DeleteSupportCommand
from support.application.queries.support_queries import (
    CheckPermissionQuery,
    CheckSupportQuery,
    GetSupportsQuery,
)


class Action(str, Enum):
    """Actions accepted by the API endpoint."""

    TEST = "test"
    CHECK_SUPPORT = "check_support"
    CREATE_APP = "create_app"
    DELETE_APP = "delete_app"
    GET_APPS = "get_apps"
    GET_MY_APPS = "get_my_apps"
    CREATE_KEY = "create_key"
    DELETE_KEY = "delete_key"
    BAN_KEY = "ban_key"
    CHECK_KEY = "check_key"
    RESET_HWID = "reset_hwid"
    GET_KEYS = "get_keys"
    LIST_KEYS = "list_keys"
    ADD_SUPPORT = "add_support"
    DELETE_SUPPORT = "delete_support"
    GET_SUPPORTS = "get_supports"
    VALIDATE_KEY = "validate_key"
    CHECK_PERMISSION = "check_permission"


# Error codes DRF reports for absent or empty required fields
ABSENT_CODES = frozenset({"required", "null", "blank"})


@dataclass
class PingQuery:
    """Health check through the action endpoint."""


class ActionSerializer(serializers.Serializer):
    """
    Base serializer for action requests.

    Subclasses set request_class, built from validated_data, and
    missing_message, reported when required fields are absent.
    Fields that are present but fail validation report invalid_message.
    """

    request_class: Type = None
    missing_message = "Missing fields"
    invalid_message = "Invalid fields"

    def error_message(self) -> str:
        """Message for a failed is_valid() call."""
        for field_errors in self.errors.values():
            if any(getattr(error, "code", None) in ABSENT_CODES for error in field_errors):
                return self.missing_message
        return self.invalid_message

    def to_request(self):
        """Build the typed request from validated data."""
        return self.request_class(**self.validated_data)


class PingSerializer(ActionSerializer):
    request_class = PingQuery


class CheckSupportSerializer(ActionSerializer):
    request_class = CheckSupportQuery
    missing_message = "User ID required"

    user_id = serializers.CharField(max_length=255)


class CreateAppSerializer(ActionSerializer):
    request_class = CreateApplicationCommand
    missing_message = "App name & User ID required"

    app_name = serializers.CharField(max_length=255, source="name")
    user_id = serializers.CharField(max_length=255, source="owner_id")


class DeleteAppSerializer(ActionSerializer):
    request_class = DeleteApplicationCommand
    missing_message = "Required fields missing"

    app_name = serializers.CharField(max_length=255, source="name")
    user_id = serializers.CharField(max_length=255, source="requester_id")


class GetAppsSerializer(ActionSerializer):
    request_class = ListApplicationsQuery
    missing_message = "User ID required"

    user_id = serializers.CharField(max_length=255, source="requester_id")


class GetMyAppsSerializer(ActionSerializer):
    request_class = ListOwnedApplicationsQuery
    missing_message = "User ID required"

    user_id = serializers.CharField(max_length=255, source="owner_id")


class CreateKeySerializer(ActionSerializer):
    """Serializer for create_key; days may be fractional."""

    request_class = CreateKeyCommand

    api = serializers.CharField(max_length=64, source="api_key")
    prefix = serializers.CharField(max_length=50)
    days = serializers.FloatField(source="lifetime_days", max_value=MAX_LIFETIME_DAYS)
    user_id = serializers.CharField(max_length=255, source="requester_id")
    device_limit = serializers.CharField(required=False, allow_null=True, allow_blank=True)

    def validate_days(self, value):
        """Lifetime must be positive."""
        if value <= 0:
            raise serializers.ValidationError("Days must be greater than zero")
        return value

    def validate_device_limit(self, value):
        """Limits beyond the column range are rejected, not clamped."""
        if parse_device_limit(value) > MAX_DEVICE_LIMIT:
            raise serializers.ValidationError(
                f"Device limit must not exceed {MAX_DEVICE_LIMIT}"
            )
        return value


class KeyTargetSerializer(ActionSerializer):
    """Shared fields of actions aimed at one key."""

    api = serializers.CharField(max_length=64, source="api_key")
    key = serializers.CharField(max_length=100)
    user_id = serializers.CharField(max_length=255, source="requester_id")


class DeleteKeySerializer(KeyTargetSerializer):
    request_class = DeleteKeyCommand


class BanKeySerializer(KeyTargetSerializer):
    request_class = BanKeyCommand


class CheckKeySerializer(KeyTargetSerializer):
    request_class = GetKeyQuery


class ResetHwidSerializer(KeyTargetSerializer):
    request_class = ResetHwidCommand


class GetKeysSerializer(ActionSerializer):
    request_class = ListKeysQuery
    missing_message = "API & User ID required"

    api = serializers.CharField(max_length=64, source="api_key")
    user_id = serializers.CharField(max_length=255, source="requester_id")


class AddSupportSerializer(ActionSerializer):
    request_class = AddSupportCommand
    missing_message = "User ID & Admin ID required"

    user_id = serializers.CharField(max_length=255)
    admin_id = serializers.CharField(max_length=255)


class DeleteSupportSerializer(AddSupportSerializer):
    request_class = DeleteSupportCommand


class GetSupportsSerializer(ActionSerializer):
    request_class = GetSupportsQuery


class ValidateKeySerializer(ActionSerializer):
    """Serializer for validate_key; no caller identity is needed."""

    request_class = ValidateKeyCommand
    missing_message = "API, Key, HWID required"

    api = serializers.CharField(max_length=64, source="api_key")
    key = serializers.CharField(max_length=100)
    hwid = serializers.CharField(max_length=255)
    system_info = serializers.CharField(required=False, allow_null=True, allow_blank=True)


class CheckPermissionSerializer(ActionSerializer):
    request_class = CheckPermissionQuery
    missing_message = "User ID required"

    user_id = serializers.CharField(max_length=255)
    api = serializers.CharField(
        max_length=64, source="api_key", required=False, allow_null=True, allow_blank=True
    )


ACTION_SERIALIZERS: Dict[Action, Type[ActionSerializer]] = {
    Action.TEST: PingSerializer,
    Action.CHECK_SUPPORT: CheckSupportSerializer,
    Action.CREATE_APP: CreateAppSerializer,
    Action.DELETE_APP: DeleteAppSerializer,
    Action.GET_APPS: GetAppsSerializer,
    Action.GET_MY_APPS: GetMyAppsSerializer,
    Action.CREATE_KEY: CreateKeySerializer,
    Action.DELETE_KEY: DeleteKeySerializer,
    Action.BAN_KEY: BanKeySerializer,
    Action.CHECK_KEY: CheckKeySerializer,
    Action.RESET_HWID: ResetHwidSerializer,
    Action.GET_KEYS: GetKeysSerializer,
    Action.LIST_KEYS: GetKeysSerializer,
    Action.ADD_SUPPORT: AddSupportSerializer,
    Action.DELETE_SUPPORT: DeleteSupportSerializer,
    Action.GET_SUPPORTS: GetSupportsSerializer,
    Action.VALIDATE_KEY: ValidateKeySerializer,
    Action.CHECK_PERMISSION: CheckPermissionSerializer,
}
