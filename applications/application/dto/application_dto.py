"""
Application DTOs for API responses.
"""
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional


@dataclass
class ApplicationDTO:
    """DTO for application information."""

    id: uuid.UUID
    name: str
    api_key: str
    created_by: str
    created_at: datetime
    key_count: Optional[int] = None


@dataclass
class ApplicationListDTO:
    """DTO for the get_apps response."""

    applications: List[ApplicationDTO]
    is_admin: bool
