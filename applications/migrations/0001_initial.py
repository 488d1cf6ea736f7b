import uuid

import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Application",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4, editable=False, primary_key=True, serialize=False
                    ),
                ),
                (
                    "name",
                    models.CharField(
                        help_text="Unique application name", max_length=255, unique=True
                    ),
                ),
                (
                    "api_key",
                    models.CharField(
                        help_text="Opaque API key (e.g., 'api_k3j9x0...')",
                        max_length=64,
                        unique=True,
                    ),
                ),
                (
                    "created_by",
                    models.CharField(db_index=True, help_text="Owner user id", max_length=255),
                ),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
            ],
            options={
                "db_table": "applications",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["created_by", "created_at"], name="applications_owner_idx")
                ],
            },
        ),
    ]
