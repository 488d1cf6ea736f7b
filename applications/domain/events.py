"""
Application domain events.
"""

import uuid
from dataclasses import dataclass

from core.domain.events import DomainEvent


@dataclass(frozen=True, kw_only=True)
class ApplicationCreated(DomainEvent):
    """Event raised when an application is registered."""

    application_id: uuid.UUID
    name: str
    owner_id: str

    @property
    def aggregate_id(self) -> str:
        return str(self.application_id)


@dataclass(frozen=True, kw_only=True)
class ApplicationDeleted(DomainEvent):
    """Event raised when an application and its keys are deleted."""

    application_id: uuid.UUID
    name: str
    deleted_by: str

    @property
    def aggregate_id(self) -> str:
        return str(self.application_id)
