import uuid

import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("licenses", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="DeviceBinding",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4, editable=False, primary_key=True, serialize=False
                    ),
                ),
                ("hwid", models.CharField(max_length=255)),
                ("bound_at", models.DateTimeField(default=django.utils.timezone.now)),
                (
                    "license_key",
                    models.ForeignKey(
                        db_column="key_id",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="devices",
                        to="licenses.licensekey",
                    ),
                ),
            ],
            options={
                "db_table": "key_devices",
                "ordering": ["bound_at"],
            },
        ),
        migrations.AddConstraint(
            model_name="devicebinding",
            constraint=models.UniqueConstraint(
                fields=("license_key", "hwid"), name="key_devices_unique_hwid"
            ),
        ),
    ]
