"""
Database-level ON DELETE CASCADE for foreign keys.

Django cascades deletes in the ORM and creates foreign keys without an
ON DELETE clause. These operations recreate a PostgreSQL foreign key
with ON DELETE CASCADE so raw SQL deletes cascade as well. Other
backends are left unchanged; SQLite cannot alter a constraint in place.
"""
from django.db import migrations

_DROP_FOREIGN_KEY = """
DO $$
DECLARE fk_name text;
BEGIN
    SELECT con.conname INTO fk_name
    FROM pg_constraint con
    JOIN pg_attribute att
        ON att.attrelid = con.conrelid AND att.attnum = ANY (con.conkey)
    WHERE con.conrelid = '{table}'::regclass
        AND con.contype = 'f'
        AND att.attname = '{column}';
    IF fk_name IS NOT NULL THEN
        EXECUTE 'ALTER TABLE {table} DROP CONSTRAINT ' || quote_ident(fk_name);
    END IF;
END $$;
"""

_ADD_FOREIGN_KEY = """
ALTER TABLE {table} ADD CONSTRAINT {name}
    FOREIGN KEY ({column}) REFERENCES {ref_table} ({ref_column})
    {on_delete} DEFERRABLE INITIALLY DEFERRED;
"""


def foreign_key_sql(table, column, ref_table, ref_column, cascade=True):
    """SQL replacing the foreign key on table.column."""
    add = _ADD_FOREIGN_KEY.format(
        table=table,
        name=f"{table}_{column}_fk_cascade",
        column=column,
        ref_table=ref_table,
        ref_column=ref_column,
        on_delete="ON DELETE CASCADE" if cascade else "",
    )
    return _DROP_FOREIGN_KEY.format(table=table, column=column) + add


def cascade_foreign_key(table, column, ref_table, ref_column):
    """Migration operation adding ON DELETE CASCADE on PostgreSQL."""

    def forwards(apps, schema_editor):
        if schema_editor.connection.vendor == "postgresql":
            schema_editor.execute(foreign_key_sql(table, column, ref_table, ref_column))

    def backwards(apps, schema_editor):
        if schema_editor.connection.vendor == "postgresql":
            schema_editor.execute(
                foreign_key_sql(table, column, ref_table, ref_column, cascade=False)
            )

    return migrations.RunPython(forwards, backwards)
