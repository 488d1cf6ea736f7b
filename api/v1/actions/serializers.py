"""
Serializers for action response payloads.
"""

from rest_framework import serializers


class ApplicationSerializer(serializers.Serializer):
    """Serializer for ApplicationDTO."""

    id = serializers.UUIDField()
    name = serializers.CharField()
    api_key = serializers.CharField()
    created_by = serializers.CharField()
    created_at = serializers.DateTimeField()


class ApplicationWithKeyCountSerializer(ApplicationSerializer):
    """Serializer for ApplicationDTO rows of get_apps."""

    key_count = serializers.IntegerField()


class LicenseKeySerializer(serializers.Serializer):
    """Serializer for LicenseKeyDTO."""

    id = serializers.UUIDField()
    key = serializers.CharField()
    api = serializers.CharField()
    prefix = serializers.CharField()
    created_at = serializers.DateTimeField()
    expires_at = serializers.DateTimeField()
    hwid = serializers.ListField(child=serializers.CharField())
    device_count = serializers.IntegerField()
    banned = serializers.BooleanField()
    used = serializers.BooleanField()
    device_limit = serializers.IntegerField()
    system_info = serializers.CharField(allow_null=True)
    first_used = serializers.DateTimeField(allow_null=True)


class SupportGrantSerializer(serializers.Serializer):
    """Serializer for SupportGrantDTO."""

    id = serializers.UUIDField()
    user_id = serializers.CharField()
    added_by = serializers.CharField()
    added_at = serializers.DateTimeField()
