from django.db import migrations

from core.migrations_sql import cascade_foreign_key


class Migration(migrations.Migration):

    dependencies = [
        ("activations", "0001_initial"),
        ("licenses", "0002_keys_api_on_delete_cascade"),
    ]

    operations = [
        cascade_foreign_key("key_devices", "key_id", "keys", "id"),
    ]
