"""
Unit tests for ServiceConfig.
"""

import pytest
from django.test import override_settings

from core.config import ServiceConfig


class TestServiceConfig:
    """Tests for ServiceConfig."""

    def test_reads_test_settings(self):
        """Test the test settings override the super-admin id."""
        config = ServiceConfig.from_settings()
        assert config.super_admin_id == "root-admin"
        assert config.max_apps_per_owner == 10
        assert config.admin_app_allowance == 999
        assert config.key_suffix_length == 6

    @override_settings(LICENSE_SERVICE={"MAX_APPS_PER_OWNER": "3"})
    def test_missing_entries_use_defaults(self):
        """Test partial settings fall back to defaults."""
        config = ServiceConfig.from_settings()
        assert config.max_apps_per_owner == 3
        assert config.super_admin_id == "superadmin"
        assert config.key_generation_attempts == 3

    def test_rejects_empty_super_admin(self):
        with pytest.raises(ValueError, match="SUPER_ADMIN_ID"):
            ServiceConfig(
                super_admin_id="",
                max_apps_per_owner=10,
                admin_app_allowance=999,
                key_suffix_length=6,
                key_generation_attempts=3,
                support_cache_ttl=60,
            )
