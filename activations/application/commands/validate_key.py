"""
ValidateKeyCommand.

Command issued by end-user clients to redeem a key on a device.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class ValidateKeyCommand:
    """
    Command to validate a key for a hardware id.

    No permission check applies; the API key scopes the lookup.
    """

    api_key: str
    key: str
    hwid: str
    system_info: Optional[str] = None
