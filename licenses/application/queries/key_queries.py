"""
Key lookup queries.
"""

from dataclasses import dataclass


@dataclass
class ListKeysQuery:
    """Query for all keys of an application, newest first."""

    requester_id: str
    api_key: str


@dataclass
class GetKeyQuery:
    """Query for a single key of an application."""

    requester_id: str
    api_key: str
    key: str
