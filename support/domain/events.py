"""
Support domain events.
"""

from dataclasses import dataclass

from core.domain.events import DomainEvent


@dataclass(frozen=True, kw_only=True)
class SupportGranted(DomainEvent):
    """Event raised when a user becomes support staff."""

    user_id: str
    added_by: str

    @property
    def aggregate_id(self) -> str:
        return self.user_id


@dataclass(frozen=True, kw_only=True)
class SupportRevoked(DomainEvent):
    """Event raised when a support grant is removed."""

    user_id: str
    removed_by: str

    @property
    def aggregate_id(self) -> str:
        return self.user_id
