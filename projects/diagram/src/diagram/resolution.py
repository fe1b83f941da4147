"""Resolution of declared foreign keys against a loaded table set."""

from __future__ import annotations

from dataclasses import replace
from logging import getLogger
from typing import TYPE_CHECKING

from diagram.errors import IntegrityError
from diagram.types import (
    Column,
    ForeignKey,
    Table,
    find_column_by_name,
    find_table_by_name,
    qualified_name,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = getLogger(__name__)


def require_table(tables: Sequence[Table], name: str) -> Table:
    """Return the named table or fail with an integrity error."""
    if table := find_table_by_name(tables, name):
        return table
    msg = f"{name} not found"
    raise IntegrityError(msg)


def require_column(
    tables: Sequence[Table],
    table_name: str,
    column_name: str,
) -> Column:
    """Return the named column or fail with an integrity error."""
    require_table(tables, table_name)
    if column := find_column_by_name(tables, table_name, column_name):
        return column
    msg = f"{qualified_name(table_name, column_name)} not found"
    raise IntegrityError(msg)


def _resolve_foreign_key(tables: Sequence[Table], fk: ForeignKey) -> ForeignKey:
    source = require_column(tables, fk.source_table, fk.source_column)
    target = require_column(tables, fk.target_table, fk.target_column)
    return replace(
        fk,
        is_source_primary_key=source.is_primary_key,
        is_target_primary_key=target.is_primary_key,
    )


def resolve_foreign_keys(tables: Sequence[Table]) -> list[Table]:
    """Check every foreign key reference and return the updated table set.

    Source columns of resolved foreign keys are flagged as foreign keys, and
    each foreign key records whether its columns are primary keys. The given
    tables are left untouched.
    """
    foreign_key_columns = {
        (fk.source_table, fk.source_column)
        for table in tables
        for fk in table.foreign_keys
    }

    resolved: list[Table] = []
    for table in tables:
        foreign_keys = [_resolve_foreign_key(tables, fk) for fk in table.foreign_keys]
        columns = [
            replace(
                column,
                is_foreign_key=column.is_foreign_key
                or (table.name, column.name) in foreign_key_columns,
            )
            for column in table.columns
        ]
        resolved.append(replace(table, columns=columns, foreign_keys=foreign_keys))

    logger.debug(
        "Resolved foreign keys on %d columns across %d tables",
        len(foreign_key_columns),
        len(resolved),
    )
    return resolved
