"""
Event handlers for domain events.

These handlers process domain events for side effects: operational
log lines and business metrics.
"""

import logging

from activations.domain.events import DeviceBound
from applications.domain.events import ApplicationCreated, ApplicationDeleted
from core.domain.events import DomainEvent, EventHandler
from core.infrastructure.events import event_bus
from core.metrics import (
    applications_created_total,
    applications_deleted_total,
    devices_bound_total,
    hwid_resets_total,
    keys_banned_total,
    keys_deleted_total,
    keys_issued_total,
    support_grants_changed_total,
)
from licenses.domain.events import (
    DevicesReset,
    LicenseKeyBanned,
    LicenseKeyCreated,
    LicenseKeyDeleted,
)
from support.domain.events import SupportGranted, SupportRevoked

logger = logging.getLogger(__name__)


class OperationalLogEventHandler(EventHandler):
    """
    Event handler for operational logging.

    Writes one structured log line per domain event.
    """

    async def handle(self, event: DomainEvent) -> None:
        """
        Handle domain event for operational logging.

        Args:
            event: Domain event to log
        """
        logger.info(
            "Domain event: %s - %s",
            event.event_type,
            event.aggregate_id,
            extra=event.to_dict(),
        )


class MetricsEventHandler(EventHandler):
    """Event handler that updates business metrics."""

    async def handle(self, event: DomainEvent) -> None:
        if isinstance(event, ApplicationCreated):
            applications_created_total.inc()
        elif isinstance(event, ApplicationDeleted):
            applications_deleted_total.inc()
        elif isinstance(event, LicenseKeyCreated):
            keys_issued_total.inc()
        elif isinstance(event, LicenseKeyBanned):
            keys_banned_total.inc()
        elif isinstance(event, LicenseKeyDeleted):
            keys_deleted_total.inc()
        elif isinstance(event, DevicesReset):
            hwid_resets_total.inc()
        elif isinstance(event, DeviceBound):
            devices_bound_total.inc()
        elif isinstance(event, SupportGranted):
            support_grants_changed_total.labels(change="granted").inc()
        elif isinstance(event, SupportRevoked):
            support_grants_changed_total.labels(change="revoked").inc()


DOMAIN_EVENTS = (
    ApplicationCreated,
    ApplicationDeleted,
    LicenseKeyCreated,
    LicenseKeyBanned,
    LicenseKeyDeleted,
    DevicesReset,
    DeviceBound,
    SupportGranted,
    SupportRevoked,
)


def register_event_handlers():
    """
    Register all event handlers with the event bus.

    Subscribing twice is a no-op, so this may run on every startup path.
    """
    log_handler = OperationalLogEventHandler()
    metrics_handler = MetricsEventHandler()

    for event_type in DOMAIN_EVENTS:
        event_bus.subscribe(event_type, log_handler)
        event_bus.subscribe(event_type, metrics_handler)

    logger.info("Event handlers registered", extra={"event_types": len(DOMAIN_EVENTS)})
