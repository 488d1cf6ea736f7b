"""
Application domain entity.

An application is the tenant that issues license keys. Its API key
scopes every key operation.
"""

import secrets
import string
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

API_KEY_PREFIX = "api_"
API_KEY_ALPHABET = string.ascii_lowercase + string.digits
API_KEY_BODY_LENGTH = 16


def generate_api_key() -> str:
    """
    Generate an opaque application API key in format: api_xxxxxxxxxxxxxxxx.

    Returns:
        Generated API key string
    """
    body = "".join(secrets.choice(API_KEY_ALPHABET) for _ in range(API_KEY_BODY_LENGTH))
    return f"{API_KEY_PREFIX}{body}"


@dataclass(frozen=True)
class Application:
    """
    Application domain entity.

    This is an immutable value object with business logic.
    """

    id: uuid.UUID
    name: str
    api_key: str
    created_by: str
    created_at: datetime

    def __post_init__(self):
        """Validate application entity."""
        if not self.name or len(self.name.strip()) == 0:
            raise ValueError("Application name cannot be empty")
        if len(self.name) > 255:
            raise ValueError("Application name too long")
        if not self.api_key:
            raise ValueError("API key is required")
        if not self.created_by:
            raise ValueError("Owner is required")

    @classmethod
    def create(
        cls,
        name: str,
        owner_id: str,
        api_key: Optional[str] = None,
        application_id: Optional[uuid.UUID] = None,
    ) -> "Application":
        """
        Create a new Application entity with a fresh API key.

        Args:
            name: Unique application name
            owner_id: User id of the owner
            api_key: Optional API key (generated if not provided)
            application_id: Optional UUID (generated if not provided)

        Returns:
            Application entity instance
        """
        return cls(
            id=application_id or uuid.uuid4(),
            name=name.strip(),
            api_key=api_key or generate_api_key(),
            created_by=owner_id,
            created_at=datetime.now(timezone.utc),
        )
