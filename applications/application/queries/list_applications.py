"""
Application listing queries.
"""

from dataclasses import dataclass


@dataclass
class ListApplicationsQuery:
    """
    Query for applications visible to the requester.

    Admins and support staff see every application; owners see their own.
    """

    requester_id: str


@dataclass
class ListOwnedApplicationsQuery:
    """Query for the caller's own applications."""

    owner_id: str
