"""
License key models.
"""
import uuid

from django.db import models
from django.utils import timezone


class LicenseKey(models.Model):
    """
    An access key issued by an application.

    Bound hardware ids live in activations.DeviceBinding.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    key = models.CharField(max_length=100, unique=True)
    application = models.ForeignKey(
        "applications.Application",
        to_field="api_key",
        db_column="api",
        on_delete=models.CASCADE,
        related_name="keys",
    )
    prefix = models.CharField(max_length=50, help_text="Display prefix (e.g., 'PRO')")
    created_at = models.DateTimeField(default=timezone.now)
    expires_at = models.DateTimeField()
    banned = models.BooleanField(default=False)
    used = models.BooleanField(default=False)
    device_limit = models.PositiveIntegerField(default=1)
    system_info = models.TextField(null=True, blank=True)
    first_used = models.DateTimeField(null=True, blank=True)

    class Meta:
        app_label = "licenses"
        db_table = "keys"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["application", "created_at"], name="keys_application_idx"),
        ]

    def __str__(self):
        return self.key

    @property
    def api_key(self) -> str:
        return self.application_id
