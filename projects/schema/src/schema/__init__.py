"""Schema loading module for supported database engines."""

from schema.main import (
    LOADERS,
    MySQLLoader,
    PostgresLoader,
    SchemaLoader,
    SQLiteLoader,
    create_database,
    load_tables,
    read_only_sqlite,
)

__all__ = [
    "LOADERS",
    "MySQLLoader",
    "PostgresLoader",
    "SQLiteLoader",
    "SchemaLoader",
    "create_database",
    "load_tables",
    "read_only_sqlite",
]
