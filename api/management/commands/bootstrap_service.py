"""
Django management command to bootstrap the service.

Applies migrations and seeds the super-admin support grant.
Safe to run repeatedly and from several processes at once.
"""
import logging

from django.core.management import call_command
from django.core.management.base import BaseCommand

from api.state import service_state

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    """Command to bootstrap the service."""

    help = "Apply migrations and seed the super-admin support grant"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument(
            "--skip-migrate",
            action="store_true",
            help="Only seed, do not apply migrations",
        )

    def handle(self, *args, **options):
        """Execute the command."""
        if not options["skip_migrate"]:
            call_command("migrate", interactive=False, verbosity=options["verbosity"])

        service_state.ensure_initialized()
        self.stdout.write(
            self.style.SUCCESS(
                f"Service bootstrapped (super-admin: {service_state.config.super_admin_id})"
            )
        )
