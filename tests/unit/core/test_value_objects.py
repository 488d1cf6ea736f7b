"""
Unit tests for value objects.
"""

import pytest

from core.domain.value_objects import HardwareId, KeyPrefix, ValidationReason


class TestKeyPrefix:
    """Tests for KeyPrefix value object."""

    def test_valid_prefix(self):
        assert str(KeyPrefix("PRO")) == "PRO"

    def test_prefix_too_long(self):
        """Test prefix longer than 50 characters raises error."""
        with pytest.raises(ValueError, match="too long"):
            KeyPrefix("P" * 51)

    def test_empty_prefix(self):
        with pytest.raises(ValueError):
            KeyPrefix("")


class TestHardwareId:
    """Tests for HardwareId value object."""

    def test_valid_hwid(self):
        assert str(HardwareId("H1")) == "H1"

    def test_hwid_too_long(self):
        with pytest.raises(ValueError, match="too long"):
            HardwareId("x" * 256)


class TestValidationReason:
    """Tests for ValidationReason enum."""

    def test_reason_strings(self):
        """Test reasons render as their wire codes."""
        assert str(ValidationReason.VALID) == "VALID"
        assert ValidationReason("KEY_BANNED") is ValidationReason.KEY_BANNED
