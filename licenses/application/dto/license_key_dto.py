"""
License key DTOs for API responses.
"""
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional


@dataclass
class LicenseKeyDTO:
    """DTO for key information."""

    id: uuid.UUID
    key: str
    api: str
    prefix: str
    created_at: datetime
    expires_at: datetime
    banned: bool
    used: bool
    device_limit: int
    system_info: Optional[str]
    first_used: Optional[datetime]
    hwid: List[str] = field(default_factory=list)
    device_count: int = 0
