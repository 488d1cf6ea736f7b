import uuid

import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("applications", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="LicenseKey",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4, editable=False, primary_key=True, serialize=False
                    ),
                ),
                ("key", models.CharField(max_length=100, unique=True)),
                (
                    "prefix",
                    models.CharField(help_text="Display prefix (e.g., 'PRO')", max_length=50),
                ),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("expires_at", models.DateTimeField()),
                ("banned", models.BooleanField(default=False)),
                ("used", models.BooleanField(default=False)),
                ("device_limit", models.PositiveIntegerField(default=1)),
                ("system_info", models.TextField(blank=True, null=True)),
                ("first_used", models.DateTimeField(blank=True, null=True)),
                (
                    "application",
                    models.ForeignKey(
                        db_column="api",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="keys",
                        to="applications.application",
                        to_field="api_key",
                    ),
                ),
            ],
            options={
                "db_table": "keys",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["application", "created_at"], name="keys_application_idx")
                ],
            },
        ),
    ]
