"""
Support and permission queries.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class CheckSupportQuery:
    """Query whether user_id is support staff."""

    user_id: str


@dataclass
class GetSupportsQuery:
    """Query for every support grant."""


@dataclass
class CheckPermissionQuery:
    """
    Query for the caller's permission summary.

    api_key is optional; without it only staff have permission.
    """

    user_id: str
    api_key: Optional[str] = None
