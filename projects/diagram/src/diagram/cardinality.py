"""Relationship cardinality classification."""

from __future__ import annotations

from enum import StrEnum, auto
from typing import TYPE_CHECKING

from diagram.resolution import require_column, require_table

if TYPE_CHECKING:
    from collections.abc import Sequence

    from diagram.types import ForeignKey, Table


class Cardinality(StrEnum):
    """Cardinality of a foreign key relationship."""

    ONE_TO_ONE = auto()
    ONE_TO_MANY = auto()


def is_one_to_one(fk: ForeignKey, tables: Sequence[Table]) -> bool:
    """Check if the foreign key describes a one to one relationship.

    - Both tables have composite primary keys: one to one only when every
      foreign key from the source table to the target table links primary
      key columns on both sides.
    - Source table has a single column primary key: one to one when both
      linked columns are primary keys.
    - Anything else is one to many.
    """
    source_table = require_table(tables, fk.source_table)
    target_table = require_table(tables, fk.target_table)

    if source_table.is_composite_pk() and target_table.is_composite_pk():
        return all(
            other.is_source_primary_key and other.is_target_primary_key
            for other in source_table.foreign_keys
            if other.target_table == fk.target_table
        )

    if not source_table.is_composite_pk():
        source_column = require_column(tables, fk.source_table, fk.source_column)
        target_column = require_column(tables, fk.target_table, fk.target_column)
        return source_column.is_primary_key and target_column.is_primary_key

    return False


def classify(fk: ForeignKey, tables: Sequence[Table]) -> Cardinality:
    """Return the cardinality of the foreign key relationship."""
    if is_one_to_one(fk, tables):
        return Cardinality.ONE_TO_ONE
    return Cardinality.ONE_TO_MANY
