"""
Support grant models.
"""

import uuid

from django.db import models
from django.utils import timezone


class SupportGrant(models.Model):
    """
    A user id with support staff rights over every application.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user_id = models.CharField(max_length=255, unique=True)
    added_by = models.CharField(max_length=255, help_text="Admin id, or 'system' for the seed")
    added_at = models.DateTimeField(default=timezone.now)

    class Meta:
        app_label = "support"
        db_table = "supports"
        ordering = ["-added_at"]

    def __str__(self):
        return self.user_id
