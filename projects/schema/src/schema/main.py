"""Schema loading from live databases using SQLAlchemy reflection."""

from __future__ import annotations

from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING, Any, ClassVar, Literal

from sqlalchemy import BigInteger, Integer, SmallInteger, create_engine, inspect
from sqlalchemy.engine import make_url
from sqlalchemy.exc import CompileError

from diagram.resolution import resolve_foreign_keys
from diagram.types import Column, ForeignKey, Table

if TYPE_CHECKING:
    from sqlalchemy import Engine, Inspector
    from sqlalchemy.engine.interfaces import (
        Dialect,
        ReflectedColumn,
        ReflectedForeignKeyConstraint,
    )
    from sqlalchemy.types import TypeEngine

logger = getLogger(__name__)

type Driver = Literal["mysql", "postgres", "sqlite"]

# URL schemes rewritten to the DBAPI driver we ship with
DRIVER_NAMES = {
    "postgres": "postgresql+psycopg",
    "postgresql": "postgresql+psycopg",
    "mysql": "mysql+pymysql",
}


def strip_comment_suffix(comment: str | None) -> str | None:
    """Drop everything after the first tab of a comment."""
    if comment is None:
        return None
    return comment.split("\t", 1)[0]


def compile_type(type_: TypeEngine[Any], dialect: Dialect) -> str:
    """Render a reflected column type the way the dialect writes it."""
    try:
        return type_.compile(dialect=dialect)
    except CompileError:
        # Untyped columns (e.g. SQLite) reflect as NullType, which has no DDL
        return type_.__class__.__name__


def read_only_sqlite(sqlite_location: Path) -> Engine:
    """Create a read-only SQLAlchemy engine for SQLite database."""
    connection_string = f"sqlite:///file:{sqlite_location}?mode=ro&uri=true"
    return create_engine(connection_string)


def create_database(driver: Driver, url: str) -> Engine:
    """Create an engine for the given driver from a connection URL.

    SQLite accepts either a SQLAlchemy URL or a plain file path, which is
    opened read-only and must already exist.
    """
    if driver == "sqlite":
        if "://" not in url:
            sqlite_location = Path(url)
            if not sqlite_location.is_file():
                msg = f"Database file does not exist: {sqlite_location}"
                raise ValueError(msg)
            return read_only_sqlite(sqlite_location)
        return create_engine(url)

    if driver not in ("mysql", "postgres"):
        msg = f"Unknown driver: {driver}"
        raise ValueError(msg)

    database_url = make_url(url)
    if drivername := DRIVER_NAMES.get(database_url.drivername):
        database_url = database_url.set(drivername=drivername)
    return create_engine(database_url)


class SchemaLoader:
    """Load tables, columns and declared foreign keys from a database."""

    default_schema: ClassVar[str | None] = None

    def __init__(self, engine: Engine, schema: str | None = None) -> None:
        """Initialize the loader with an engine and an optional schema name."""
        self.engine = engine
        self.schema = schema or self.default_schema

    def ddl_type(self, column: ReflectedColumn) -> str:
        """Return the column type as it is displayed in the diagram."""
        return compile_type(column["type"], self.engine.dialect)

    def _table_comment(self, inspector: Inspector, table_name: str) -> str | None:
        if not inspector.dialect.supports_comments:
            return None
        comment = inspector.get_table_comment(table_name, schema=self.schema)
        return strip_comment_suffix(comment["text"]) or None

    def _build_columns(self, inspector: Inspector, table_name: str) -> list[Column]:
        pk_constraint = inspector.get_pk_constraint(table_name, schema=self.schema)
        primary_keys = set(pk_constraint["constrained_columns"])
        return [
            Column(
                ordinal=ordinal,
                name=col_info["name"],
                data_type=compile_type(col_info["type"], self.engine.dialect),
                ddl_type=self.ddl_type(col_info),
                comment=strip_comment_suffix(col_info.get("comment")) or None,
                not_null=not col_info["nullable"],
                is_primary_key=col_info["name"] in primary_keys,
            )
            for ordinal, col_info in enumerate(
                inspector.get_columns(table_name, schema=self.schema),
                start=1,
            )
        ]

    def _build_foreign_keys(
        self,
        inspector: Inspector,
        table_name: str,
    ) -> list[ForeignKey]:
        return [
            fk
            for constraint in inspector.get_foreign_keys(table_name, schema=self.schema)
            for fk in self._foreign_keys_from_constraint(table_name, constraint)
        ]

    @staticmethod
    def _foreign_keys_from_constraint(
        table_name: str,
        constraint: ReflectedForeignKeyConstraint,
    ) -> list[ForeignKey]:
        """Split a (possibly composite) constraint into one edge per column."""
        return [
            ForeignKey(
                constraint_name=constraint["name"] or f"{table_name}_{source}_fkey",
                source_table=table_name,
                source_column=source,
                target_table=constraint["referred_table"],
                target_column=target,
            )
            for source, target in zip(
                constraint["constrained_columns"],
                constraint["referred_columns"],
                strict=True,
            )
        ]

    def load(self) -> list[Table]:
        """Load every table of the schema with resolved foreign keys."""
        inspector = inspect(self.engine)
        table_names = sorted(inspector.get_table_names(schema=self.schema))
        logger.info("Loading %d tables from %s", len(table_names), self.engine.url)

        tables = [
            Table(
                name=table_name,
                comment=self._table_comment(inspector, table_name),
                columns=self._build_columns(inspector, table_name),
                foreign_keys=self._build_foreign_keys(inspector, table_name),
            )
            for table_name in table_names
        ]
        return resolve_foreign_keys(tables)


class PostgresLoader(SchemaLoader):
    """PostgreSQL loader, reporting sequence backed integers as serial types."""

    default_schema = "public"

    SERIAL_TYPES: ClassVar[tuple[tuple[type[Integer], str], ...]] = (
        (SmallInteger, "smallserial"),
        (BigInteger, "bigserial"),
        (Integer, "serial"),
    )

    def ddl_type(self, column: ReflectedColumn) -> str:
        """Return serial pseudo types for columns defaulting to a sequence."""
        default = column.get("default") or ""
        if default.startswith("nextval("):
            for integer_type, serial in self.SERIAL_TYPES:
                if isinstance(column["type"], integer_type):
                    return serial
        return super().ddl_type(column)


class MySQLLoader(SchemaLoader):
    """MySQL loader, reading the current database of the connection."""


class SQLiteLoader(SchemaLoader):
    """SQLite loader."""


LOADERS: dict[str, type[SchemaLoader]] = {
    "mysql": MySQLLoader,
    "postgres": PostgresLoader,
    "sqlite": SQLiteLoader,
}


def load_tables(driver: Driver, url: str, schema: str | None = None) -> list[Table]:
    """Load the tables of a database for the given driver."""
    engine = create_database(driver, url)
    return LOADERS[driver](engine, schema).load()
