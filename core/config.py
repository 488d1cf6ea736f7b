"""
Service configuration.

Reads the LICENSE_SERVICE settings block into a typed, immutable object
so that handlers receive their limits explicitly.
"""

from dataclasses import dataclass
from typing import Any, Dict

from django.conf import settings

DEFAULTS: Dict[str, Any] = {
    "SUPER_ADMIN_ID": "superadmin",
    "MAX_APPS_PER_OWNER": 10,
    "ADMIN_APP_ALLOWANCE": 999,
    "KEY_SUFFIX_LENGTH": 6,
    "KEY_GENERATION_ATTEMPTS": 3,
    "SUPPORT_CACHE_TTL": 60,
}


@dataclass(frozen=True)
class ServiceConfig:
    """Service-wide constants."""

    super_admin_id: str
    max_apps_per_owner: int
    admin_app_allowance: int
    key_suffix_length: int
    key_generation_attempts: int
    support_cache_ttl: int

    def __post_init__(self):
        """Validate configuration."""
        if not self.super_admin_id:
            raise ValueError("SUPER_ADMIN_ID must be configured")
        if self.max_apps_per_owner < 0:
            raise ValueError("MAX_APPS_PER_OWNER cannot be negative")
        if self.key_suffix_length < 1:
            raise ValueError("KEY_SUFFIX_LENGTH must be at least 1")
        if self.key_generation_attempts < 1:
            raise ValueError("KEY_GENERATION_ATTEMPTS must be at least 1")

    @classmethod
    def from_settings(cls) -> "ServiceConfig":
        """
        Build configuration from Django settings.

        Missing entries fall back to DEFAULTS.

        Returns:
            ServiceConfig instance
        """
        values = {**DEFAULTS, **getattr(settings, "LICENSE_SERVICE", {})}
        return cls(
            super_admin_id=str(values["SUPER_ADMIN_ID"]),
            max_apps_per_owner=int(values["MAX_APPS_PER_OWNER"]),
            admin_app_allowance=int(values["ADMIN_APP_ALLOWANCE"]),
            key_suffix_length=int(values["KEY_SUFFIX_LENGTH"]),
            key_generation_attempts=int(values["KEY_GENERATION_ATTEMPTS"]),
            support_cache_ttl=int(values["SUPPORT_CACHE_TTL"]),
        )
