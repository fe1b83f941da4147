"""Main module for PlantUML diagram generation."""

from __future__ import annotations

from typing import TYPE_CHECKING

from diagram.filtering import filter_tables
from diagram.inference import infer_foreign_keys
from diagram.rendering import render

if TYPE_CHECKING:
    from collections.abc import Sequence

    from diagram.types import Table


def tables_to_plantuml(
    tables: list[Table],
    *,
    include: Sequence[str] = (),
    exclude: Sequence[str] = (),
    title: str = "",
    infer: bool = True,
) -> bytes:
    """Generate a PlantUML diagram from loaded tables.

    Foreign keys are inferred from column names when none are declared,
    then tables are narrowed to the include patterns and stripped of the
    exclude patterns before rendering.
    """
    if infer:
        tables = infer_foreign_keys(tables)
    if include:
        tables = filter_tables(True, tables, include)  # noqa: FBT003
    if exclude:
        tables = filter_tables(False, tables, exclude)  # noqa: FBT003
    return render(tables, title)
