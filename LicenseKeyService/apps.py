"""
App configuration for License Key Service.
"""

import atexit
import logging
import sys

from django.apps import AppConfig

logger = logging.getLogger(__name__)

# Management commands that need neither tracing nor event handlers
SKIPPED_COMMANDS = {"migrate", "makemigrations", "collectstatic", "check"}


class LicenseKeyServiceConfig(AppConfig):
    """App configuration for LicenseKeyService."""

    name = "LicenseKeyService"
    verbose_name = "License Key Service"

    def ready(self):
        """Called when Django starts."""
        from api.state import service_state
        from core.infrastructure.event_handlers import register_event_handlers

        register_event_handlers()
        atexit.register(service_state.shutdown)

        if len(sys.argv) > 1 and sys.argv[1] in SKIPPED_COMMANDS:
            return
        self.setup_observability()

    def setup_observability(self):
        """Setup tracing and the metrics endpoint after apps are ready."""
        from core.instrumentation import setup_opentelemetry

        try:
            setup_opentelemetry()
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.warning("Failed to setup OpenTelemetry: %s", e)
