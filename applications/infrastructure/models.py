"""
Application models.
"""

import uuid

from django.db import models
from django.utils import timezone


class Application(models.Model):
    """
    Represents a registered application.

    The API key scopes every license key operation.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255, unique=True, help_text="Unique application name")
    api_key = models.CharField(
        max_length=64,
        unique=True,
        help_text="Opaque API key (e.g., 'api_k3j9x0...')",
    )
    created_by = models.CharField(max_length=255, db_index=True, help_text="Owner user id")
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        app_label = "applications"
        db_table = "applications"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["created_by", "created_at"], name="applications_owner_idx"),
        ]

    def __str__(self):
        return self.name
