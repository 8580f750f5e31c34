"""
Test suite for sql.dml statement assembly.

Tests cover:
- insert_builder: INSERT ... SET, ignoring filters and joins
- update_builder: clause order with joins, filters, ordering and limit
- delete_builder: clause order, ignoring joins and assignments
"""

import pytest

from sql.clauses import ClauseStore, JoinClause, Limit, parse_set, parse_where
from sql.dml import delete_builder, insert_builder, update_builder


@pytest.fixture
def full_store():
    """A store with every clause populated."""
    return ClauseStore(
        select="id",
        table="users",
        joins=[JoinClause("INNER", "roles r", "r.id = users.role_id")],
        assignments=parse_set({"name": "Carl"}) + ["hits=hits+1"],
        conditions=parse_where({"id": 5}),
        order_by={"id": "ASC"},
        limit=Limit(0, 1),
    )


@pytest.mark.unit
def test_insert_builder(escape):
    store = ClauseStore(assignments=parse_set({"name": "Bob"}))

    assert insert_builder("users", store, escape) == "INSERT INTO users SET name='Bob'"


@pytest.mark.unit
def test_insert_builder_ignores_filters(full_store, escape):
    assert insert_builder("accounts", full_store, escape) == (
        "INSERT INTO accounts SET name='Carl', hits=hits+1"
    )


@pytest.mark.unit
def test_update_builder_minimal(escape):
    store = ClauseStore(
        table="users",
        assignments=parse_set({"name": "Carl"}),
        conditions=parse_where({"id": 5}),
    )

    assert update_builder(store, escape) == "UPDATE users SET name='Carl' WHERE AND id = 5"


@pytest.mark.integration
def test_update_builder_full(full_store, escape):
    assert update_builder(full_store, escape) == (
        "UPDATE users INNER roles r ON(r.id = users.role_id) "
        "SET name='Carl', hits=hits+1 WHERE AND id = 5 ORDER BY id ASC LIMIT 0, 1"
    )


@pytest.mark.unit
def test_delete_builder_minimal(escape):
    assert delete_builder(ClauseStore(table="users"), escape) == "DELETE FROM users"


@pytest.mark.integration
def test_delete_builder_full(full_store, escape):
    assert delete_builder(full_store, escape) == (
        "DELETE FROM users WHERE AND id = 5 ORDER BY id ASC LIMIT 0, 1"
    )
