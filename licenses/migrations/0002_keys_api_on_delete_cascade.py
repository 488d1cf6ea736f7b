from django.db import migrations

from core.migrations_sql import cascade_foreign_key


class Migration(migrations.Migration):

    dependencies = [
        ("licenses", "0001_initial"),
    ]

    operations = [
        cascade_foreign_key("keys", "api", "applications", "api_key"),
    ]
