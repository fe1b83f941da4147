"""Tests for the end to end diagram pipeline."""

from diagram.main import tables_to_plantuml
from diagram.types import Column, Table


def make_table(name: str, primary_key: str, *columns: str) -> Table:
    """Create a table with a single column primary key."""
    return Table(
        name=name,
        columns=[
            Column(
                ordinal=ordinal,
                name=column,
                data_type="integer",
                ddl_type="integer",
                is_primary_key=column == primary_key,
            )
            for ordinal, column in enumerate((primary_key, *columns), start=1)
        ],
    )


def shop() -> list[Table]:
    """Create tables linked only by naming convention."""
    return [
        make_table("customers", "id", "name"),
        make_table("orders", "id", "customer_id"),
        make_table("invoices", "id", "order_id"),
    ]


def relations(document: bytes) -> list[str]:
    """Return the relation lines of a rendered document."""
    lines = document.decode().splitlines()
    return [line for line in lines if "--" in line and '"' in line]


def test_inferred_relations_are_rendered() -> None:
    """Test that inferred foreign keys appear as relations."""
    document = tables_to_plantuml(shop(), title="Shop")

    assert document.startswith(b"@startuml\ntitle Shop\n")
    assert document.endswith(b"@enduml\n")
    assert relations(document) == [
        '"**orders**" }-- "**customers**"',
        '"**invoices**" }-- "**orders**"',
    ]


def test_inference_can_be_disabled() -> None:
    """Test that no relations are rendered without inference."""
    assert relations(tables_to_plantuml(shop(), infer=False)) == []


def test_include_and_exclude_patterns() -> None:
    """Test that inclusion and exclusion are applied in turn."""
    document = tables_to_plantuml(
        shop(),
        include=["orders", "invoices"],
        exclude=["invoices"],
    ).decode()

    assert 'entity "**orders**"' in document
    assert 'entity "**invoices**"' not in document
    assert 'entity "**customers**"' not in document
    assert relations(document.encode()) == []


def test_same_input_renders_identical_bytes() -> None:
    """Test that the pipeline is deterministic."""
    assert tables_to_plantuml(shop(), title="Shop") == tables_to_plantuml(
        shop(),
        title="Shop",
    )
