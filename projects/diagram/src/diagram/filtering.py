"""Table selection by name pattern."""

from __future__ import annotations

import re
from logging import getLogger
from typing import TYPE_CHECKING

from diagram.errors import FilterError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from diagram.types import Table

logger = getLogger(__name__)

# Patterns may arrive wrapped in path separators, e.g. "/orders/"
SEPARATOR = r"([\\/])?"


def compile_patterns(patterns: Iterable[str]) -> list[re.Pattern[str]]:
    """Compile table name patterns in sorted order."""
    expressions: list[re.Pattern[str]] = []
    for pattern in sorted(patterns):
        try:
            expressions.append(re.compile(f"{SEPARATOR}{pattern}{SEPARATOR}"))
        except re.error as e:
            msg = f"Invalid table pattern '{pattern}': {e}"
            raise FilterError(msg) from e
    return expressions


def matches(name: str, expressions: Iterable[re.Pattern[str]]) -> bool:
    """Check if any expression matches somewhere in the name."""
    return any(expression.search(name) for expression in expressions)


def filter_tables(
    match: bool,  # noqa: FBT001
    tables: list[Table],
    patterns: Iterable[str],
) -> list[Table]:
    """Select tables whose name match state equals ``match``.

    With ``match=True`` the patterns act as an allow-list, with ``match=False``
    as a deny-list. Foreign keys of the selected tables are pruned in place so
    that only edges into tables passing the same test remain.
    """
    expressions = compile_patterns(patterns)

    selected: list[Table] = []
    for table in tables:
        if matches(table.name, expressions) != match:
            continue
        table.foreign_keys = [
            fk
            for fk in table.foreign_keys
            if matches(fk.target_table, expressions) == match
        ]
        selected.append(table)

    logger.debug(
        "%s filter kept %d of %d tables",
        "Include" if match else "Exclude",
        len(selected),
        len(tables),
    )
    return selected
