"""
===========================================
Data Manipulation Language (DML) Builders.
===========================================

This module assembles INSERT, UPDATE and DELETE statements from a
ClauseStore, in the clause order each statement kind requires.

Functions:
- insert_builder: INSERT INTO <table> SET <assignments>
- update_builder: UPDATE <table> <joins> SET <assignments> [WHERE] [ORDER BY] [LIMIT]
- delete_builder: DELETE FROM <table> [WHERE] [ORDER BY] [LIMIT]

Usage:
    from sql.clauses import ClauseStore, parse_set
    from sql.dml import insert_builder

    store = ClauseStore()
    store.assignments.extend(parse_set({'name': 'Bob'}))
    sql = insert_builder('users', store, escape=driver.escape)
    # INSERT INTO users SET name='Bob'
"""

from .clauses import ClauseStore
from .query_builder import (
    EscapeFunc,
    filter_clauses,
    join_builder,
    join_statement,
    set_builder,
)


def insert_builder(table: str, store: ClauseStore, escape: EscapeFunc) -> str:
    """
    Generate an INSERT ... SET statement.

    Joins, conditions, ordering and limit in the store are ignored.

    Args:
        table: Target table
        store: Accumulated clauses (only assignments are used)
        escape: Driver function rendering a value as a SQL literal

    Returns:
        SQL INSERT statement
    """
    return join_statement([
        "INSERT INTO",
        table,
        "SET",
        set_builder(store.assignments, escape),
    ])


def update_builder(store: ClauseStore, escape: EscapeFunc) -> str:
    """
    Generate an UPDATE statement.

    Args:
        store: Accumulated clauses
        escape: Driver function rendering a value as a SQL literal

    Returns:
        SQL UPDATE statement
    """
    return join_statement([
        "UPDATE",
        store.table,
        join_builder(store.joins),
        "SET",
        set_builder(store.assignments, escape),
        *filter_clauses(store, escape),
    ])


def delete_builder(store: ClauseStore, escape: EscapeFunc) -> str:
    """
    Generate a DELETE statement.

    Joins and assignments in the store are ignored.
    """
    return join_statement([
        "DELETE FROM",
        store.table,
        *filter_clauses(store, escape),
    ])
