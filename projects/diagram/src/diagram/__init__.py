"""Schema model and PlantUML diagram generation package."""

from diagram.cardinality import Cardinality, classify, is_one_to_one
from diagram.errors import (
    FilterError,
    IntegrityError,
    PlanterError,
    RasterizeError,
    RenderError,
)
from diagram.filtering import filter_tables
from diagram.inference import infer_foreign_keys
from diagram.main import tables_to_plantuml
from diagram.rendering import render
from diagram.resolution import resolve_foreign_keys
from diagram.types import (
    Column,
    ForeignKey,
    Table,
    find_column_by_name,
    find_table_by_name,
    is_composite_pk,
)

__all__ = [
    "Cardinality",
    "Column",
    "FilterError",
    "ForeignKey",
    "IntegrityError",
    "PlanterError",
    "RasterizeError",
    "RenderError",
    "Table",
    "classify",
    "filter_tables",
    "find_column_by_name",
    "find_table_by_name",
    "infer_foreign_keys",
    "is_composite_pk",
    "is_one_to_one",
    "render",
    "resolve_foreign_keys",
    "tables_to_plantuml",
]
