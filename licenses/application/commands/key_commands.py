"""
Key lifecycle commands.

Every command is scoped by the owning application's API key and
carries the requester for the permission check.
"""

from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class CreateKeyCommand:
    """
    Command to issue a key.

    device_limit is parsed leniently; anything unusable becomes 1.
    """

    requester_id: str
    api_key: str
    prefix: str
    lifetime_days: float
    device_limit: Optional[Any] = None


@dataclass
class BanKeyCommand:
    """Command to ban a key permanently."""

    requester_id: str
    api_key: str
    key: str


@dataclass
class DeleteKeyCommand:
    """Command to delete a key."""

    requester_id: str
    api_key: str
    key: str


@dataclass
class ResetHwidCommand:
    """Command to clear a key's bound devices."""

    requester_id: str
    api_key: str
    key: str
