"""
Value objects for the domain.

Value objects are immutable objects that are defined by their attributes
rather than their identity. They have no identity and are compared by value.
"""
from abc import ABC
from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class ValueObject(ABC):
    """
    Base class for value objects.

    Value objects are immutable and compared by value.
    """

    def __eq__(self, other):
        """Compare value objects by their attributes."""
        if not isinstance(other, self.__class__):
            return False
        return self.__dict__ == other.__dict__

    def __hash__(self):
        """Make value objects hashable."""
        return hash(tuple(sorted(self.__dict__.items())))


@dataclass(frozen=True)
class KeyPrefix(ValueObject):
    """Display prefix placed in front of generated key strings."""

    value: str

    def __post_init__(self):
        """Validate prefix."""
        if not self.value or not self.value.strip():
            raise ValueError("Key prefix cannot be empty")
        if len(self.value) > 50:
            raise ValueError("Key prefix too long")

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class HardwareId(ValueObject):
    """Hardware identifier reported by a client device."""

    value: str

    def __post_init__(self):
        """Validate hardware id."""
        if not self.value or not self.value.strip():
            raise ValueError("HWID cannot be empty")
        if len(self.value) > 255:
            raise ValueError("HWID too long")

    def __str__(self) -> str:
        return self.value


class ValidationReason(Enum):
    """Outcome codes of the key redemption path."""

    VALID = "VALID"
    INVALID_APPLICATION = "INVALID_APPLICATION"
    INVALID_KEY = "INVALID_KEY"
    KEY_BANNED = "KEY_BANNED"
    KEY_EXPIRED = "KEY_EXPIRED"
    DEVICE_LIMIT_REACHED = "DEVICE_LIMIT_REACHED"

    def __str__(self) -> str:
        return self.value
