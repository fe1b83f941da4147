"""Tests for relationship cardinality classification."""

import pytest

from diagram.cardinality import Cardinality, classify, is_one_to_one
from diagram.errors import IntegrityError
from diagram.resolution import resolve_foreign_keys
from diagram.types import Column, ForeignKey, Table


def make_table(name: str, primary_keys: list[str], columns: list[str]) -> Table:
    """Create a table from primary key and regular column names."""
    return Table(
        name=name,
        columns=[
            Column(
                ordinal=ordinal,
                name=column,
                data_type="integer",
                ddl_type="integer",
                is_primary_key=column in primary_keys,
            )
            for ordinal, column in enumerate(primary_keys + columns, start=1)
        ],
    )


def link(source: Table, column: str, target: Table, target_column: str) -> None:
    """Declare a foreign key on the source table."""
    source.foreign_keys.append(
        ForeignKey(
            constraint_name=f"{source.name}_{column}_fkey",
            source_table=source.name,
            source_column=column,
            target_table=target.name,
            target_column=target_column,
        ),
    )


def test_primary_key_to_primary_key_is_one_to_one() -> None:
    """Test a single column key shared between two tables."""
    users = make_table("users", ["id"], ["email"])
    profiles = make_table("profiles", ["user_id"], ["bio"])
    link(profiles, "user_id", users, "id")
    tables = resolve_foreign_keys([users, profiles])

    assert is_one_to_one(tables[1].foreign_keys[0], tables)
    assert classify(tables[1].foreign_keys[0], tables) == Cardinality.ONE_TO_ONE


def test_non_key_source_column_is_one_to_many() -> None:
    """Test a regular referencing column."""
    users = make_table("users", ["id"], [])
    posts = make_table("posts", ["id"], ["user_id"])
    link(posts, "user_id", users, "id")
    tables = resolve_foreign_keys([users, posts])

    assert not is_one_to_one(tables[1].foreign_keys[0], tables)
    assert classify(tables[1].foreign_keys[0], tables) == Cardinality.ONE_TO_MANY


def test_non_key_target_column_is_one_to_many() -> None:
    """Test a primary key referencing a non key column."""
    users = make_table("users", ["id"], ["email"])
    accounts = make_table("accounts", ["email"], [])
    link(accounts, "email", users, "email")
    tables = resolve_foreign_keys([users, accounts])

    assert not is_one_to_one(tables[1].foreign_keys[0], tables)


def test_full_composite_key_is_one_to_one() -> None:
    """Test a composite key carried entirely into another composite key."""
    lines = make_table("order_lines", ["order_id", "line_no"], ["sku"])
    shipments = make_table("shipments", ["order_id", "line_no"], ["carrier"])
    link(shipments, "order_id", lines, "order_id")
    link(shipments, "line_no", lines, "line_no")
    tables = resolve_foreign_keys([lines, shipments])

    assert all(is_one_to_one(fk, tables) for fk in tables[1].foreign_keys)


def test_partial_composite_key_is_one_to_many() -> None:
    """Test that one non key edge demotes the whole composite relation."""
    lines = make_table("order_lines", ["order_id", "line_no"], [])
    shipments = make_table("shipments", ["order_id", "line_no"], ["ref_line"])
    link(shipments, "order_id", lines, "order_id")
    link(shipments, "line_no", lines, "line_no")
    link(shipments, "ref_line", lines, "line_no")
    tables = resolve_foreign_keys([lines, shipments])

    assert not any(is_one_to_one(fk, tables) for fk in tables[1].foreign_keys)


def test_composite_rule_only_considers_edges_to_same_target() -> None:
    """Test that edges into other tables do not affect the classification."""
    lines = make_table("order_lines", ["order_id", "line_no"], [])
    warehouses = make_table("warehouses", ["id"], [])
    shipments = make_table("shipments", ["order_id", "line_no"], ["warehouse_id"])
    link(shipments, "order_id", lines, "order_id")
    link(shipments, "line_no", lines, "line_no")
    link(shipments, "warehouse_id", warehouses, "id")
    tables = resolve_foreign_keys([lines, warehouses, shipments])

    to_lines, _, to_warehouse = tables[2].foreign_keys
    assert is_one_to_one(to_lines, tables)
    assert not is_one_to_one(to_warehouse, tables)


def test_composite_source_with_single_key_target_is_one_to_many() -> None:
    """Test that a composite source never counts as one to one alone."""
    orders = make_table("orders", ["id"], [])
    lines = make_table("order_lines", ["order_id", "line_no"], [])
    link(lines, "order_id", orders, "id")
    tables = resolve_foreign_keys([orders, lines])

    assert not is_one_to_one(tables[1].foreign_keys[0], tables)


def test_unknown_table_is_fatal() -> None:
    """Test that classification needs both tables in the set."""
    users = make_table("users", ["id"], [])
    posts = make_table("posts", ["id"], ["user_id"])
    link(posts, "user_id", users, "id")

    with pytest.raises(IntegrityError, match="users not found"):
        is_one_to_one(posts.foreign_keys[0], [posts])
