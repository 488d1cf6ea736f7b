"""
Device binding models.
"""
import uuid

from django.db import models
from django.utils import timezone


class DeviceBinding(models.Model):
    """
    A hardware id bound to a license key.

    The ordered set of a key's HWIDs is its bindings ordered by bound_at.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    license_key = models.ForeignKey(
        "licenses.LicenseKey",
        on_delete=models.CASCADE,
        related_name="devices",
        db_column="key_id",
    )
    hwid = models.CharField(max_length=255)
    bound_at = models.DateTimeField(default=timezone.now)

    class Meta:
        app_label = "activations"
        db_table = "key_devices"
        ordering = ["bound_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["license_key", "hwid"],
                name="key_devices_unique_hwid",
            ),
        ]

    def __str__(self):
        return f"{self.license_key_id} - {self.hwid}"
