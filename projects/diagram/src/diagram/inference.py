"""Foreign key inference from column naming conventions.

Used as a fallback for schemas that declare no foreign key constraints at all.
A column is linked to another table's primary key when its name follows one
of two conventions:

- the primary key name already contains the owning table name
  (``customer.customer_id``), and the column has the same name;
- otherwise the column is named ``<table>_<primary key>`` (``orders_id``).

Plural table names are also tried in singular form, so ``customers.id`` is
referred to by ``customer_id``. Columns with unconventional names are left
unlinked.
"""

from __future__ import annotations

from itertools import combinations
from logging import getLogger
from typing import TYPE_CHECKING

from diagram.types import Column, ForeignKey, Table, qualified_name

if TYPE_CHECKING:
    from collections.abc import Iterator

logger = getLogger(__name__)


def has_foreign_keys(tables: list[Table]) -> bool:
    """Check if any table declares at least one foreign key."""
    return any(table.foreign_keys for table in tables)


def table_name_forms(table_name: str) -> list[str]:
    """Return the table name and, for plural names, its singular form."""
    forms = [table_name]
    if len(table_name) > 1 and table_name.endswith("s"):
        forms.append(table_name[:-1])
    return forms


def referencing_names(table_name: str, pk_name: str) -> set[str]:
    """Return the column names that conventionally refer to a primary key."""
    return {
        pk_name if form in pk_name else f"{form}_{pk_name}"
        for form in table_name_forms(table_name)
    }


def matching_primary_key(owner: Table, column_name: str) -> Column | None:
    """Return the owner's first primary key column the given column refers to."""
    for pk in owner.primary_keys:
        if column_name in referencing_names(owner.name, pk.name):
            return pk
    return None


def referencing_edges(owner: Table, referencer: Table) -> Iterator[ForeignKey]:
    """Yield foreign keys from the referencer's columns to the owner's keys."""
    for column in referencer.columns:
        if column.is_primary_key:
            continue
        if pk := matching_primary_key(owner, column.name):
            yield ForeignKey(
                constraint_name=column.name,
                source_table=referencer.name,
                source_column=column.name,
                target_table=owner.name,
                target_column=pk.name,
            )


def _link(owner: Table, referencer: Table) -> int:
    """Append inferred foreign keys to the referencer, returning how many."""
    edges = list(referencing_edges(owner, referencer))
    for fk in edges:
        logger.debug(
            "Inferred %s -> %s",
            qualified_name(fk.source_table, fk.source_column),
            qualified_name(fk.target_table, fk.target_column),
        )
        for column in referencer.columns:
            if column.name == fk.source_column:
                column.is_foreign_key = True
    referencer.foreign_keys.extend(edges)
    return len(edges)


def infer_foreign_keys(tables: list[Table]) -> list[Table]:
    """Infer foreign keys when no table in the set declares any.

    Every pair of distinct tables is examined once, in load order, in both
    directions. Tables are updated in place and returned for chaining.
    """
    if has_foreign_keys(tables):
        logger.debug("Foreign keys are declared, skipping inference")
        return tables

    inferred = 0
    for first, second in combinations(tables, 2):
        inferred += _link(first, second)
        inferred += _link(second, first)

    logger.info("Inferred %d foreign keys from column names", inferred)
    return tables
