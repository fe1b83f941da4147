"""Schema model used to build entity diagrams."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable


@dataclass
class Column:
    """A table column as reported by the database."""

    ordinal: int  # 1-based position within the table
    name: str
    data_type: str  # Raw engine type
    ddl_type: str  # Type as written in DDL, used for display
    comment: str | None = None
    not_null: bool = False
    is_primary_key: bool = False
    is_foreign_key: bool = False


@dataclass
class ForeignKey:
    """Foreign key edge from a source column to a target column.

    Tables and columns are referenced by name and looked up in the owning
    table set when needed.
    """

    constraint_name: str
    source_table: str
    source_column: str
    target_table: str
    target_column: str
    is_source_primary_key: bool = False
    is_target_primary_key: bool = False


@dataclass
class Table:
    """A table with its columns and outgoing foreign keys."""

    name: str
    comment: str | None = None
    columns: list[Column] = field(default_factory=list)
    foreign_keys: list[ForeignKey] = field(default_factory=list)
    auto_generated_pk: bool = False

    @property
    def primary_keys(self) -> list[Column]:
        """Primary key columns in ordinal order."""
        return [column for column in self.columns if column.is_primary_key]

    def is_composite_pk(self) -> bool:
        """Check if the table has a primary key made of two or more columns."""
        count = 0
        for column in self.columns:
            if column.is_primary_key:
                count += 1
            if count >= 2:  # noqa: PLR2004
                return True
        return False


def qualified_name(table_name: str, column_name: str) -> str:
    """Return the dotted table.column name used in messages."""
    return f"{table_name}.{column_name}"


def find_table_by_name(tables: Iterable[Table], name: str) -> Table | None:
    """Return the first table with the given name."""
    return next((table for table in tables if table.name == name), None)


def find_column_by_name(
    tables: Iterable[Table],
    table_name: str,
    column_name: str,
) -> Column | None:
    """Return the named column of the first table with the given name."""
    if table := find_table_by_name(tables, table_name):
        return next((col for col in table.columns if col.name == column_name), None)
    return None


def is_composite_pk(table: Table) -> bool:
    """Check if the table has a composite primary key."""
    return table.is_composite_pk()
