"""PlantUML rendering of tables and foreign keys."""

from __future__ import annotations

from operator import attrgetter
from pathlib import Path
from typing import TYPE_CHECKING

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateError

from diagram.cardinality import classify
from diagram.errors import RenderError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from diagram.types import Table

TEMPLATE_DIR = Path(__file__).parent / "templates"

_JINJA_ENV = Environment(
    loader=FileSystemLoader(TEMPLATE_DIR),
    autoescape=False,  # noqa: S701 - PlantUML output, not HTML
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=True,
    undefined=StrictUndefined,
)

PROLOGUE = "@startuml\n"
LAYOUT = "hide circle\nskinparam linetype ortho\n"
EPILOGUE = "@enduml\n"


def tables_to_entries(tables: Sequence[Table]) -> str:
    """Render one entity block per table."""
    template = _JINJA_ENV.get_template("entry.puml.j2")
    entries: list[str] = []
    for table in tables:
        try:
            entries.append(
                template.render(
                    table=table,
                    columns=sorted(table.columns, key=attrgetter("ordinal")),
                ),
            )
        except TemplateError as e:
            msg = f"Failed to render table {table.name}: {e}"
            raise RenderError(msg) from e
    return "".join(entries)


def foreign_keys_to_relations(tables: Sequence[Table]) -> str:
    """Render one relation line per foreign key, table by table."""
    template = _JINJA_ENV.get_template("relation.puml.j2")
    relations: list[str] = []
    for table in tables:
        for fk in table.foreign_keys:
            try:
                relations.append(
                    template.render(fk=fk, cardinality=classify(fk, tables)),
                )
            except TemplateError as e:
                msg = f"Failed to render relation {fk.constraint_name}: {e}"
                raise RenderError(msg) from e
    return "".join(relations)


def write_document(entries: str, relations: str, title: str = "") -> str:
    """Wrap entries and relations into a complete PlantUML document."""
    parts = [PROLOGUE]
    if title:
        parts.append(f"title {title}\n")
    parts.extend((LAYOUT, entries, relations, EPILOGUE))
    return "".join(parts)


def render(tables: Sequence[Table], title: str = "") -> bytes:
    """Render the tables and their foreign keys as a PlantUML diagram."""
    entries = tables_to_entries(tables)
    relations = foreign_keys_to_relations(tables)
    return write_document(entries, relations, title).encode()
