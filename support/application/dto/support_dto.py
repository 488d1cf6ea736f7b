"""
Support DTOs for API responses.
"""
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class SupportGrantDTO:
    """DTO for support grant information."""

    id: uuid.UUID
    user_id: str
    added_by: str
    added_at: datetime


@dataclass
class SupportStatusDTO:
    """DTO for the check_support response."""

    is_support: bool
    user: Optional[SupportGrantDTO]


@dataclass
class PermissionSummaryDTO:
    """DTO for the check_permission response."""

    has_permission: bool
    is_admin: bool
    app_count: int
    max_apps: int
