"""
============================
SQL Query Builder Utilities.
============================

This module turns canonical clause entries into SQL fragments.
All builders follow the _builder naming convention for consistency.

Fragment Builders:
- fields_builder: SELECT field list ('*' when unset)
- join_builder: JOIN entries, space separated
- where_builder: WHERE entries, space separated (no WHERE keyword)
- set_builder: SET entries, comma separated (no SET keyword)
- order_by_builder: ORDER BY pairs, comma separated (no keyword)
- limit_builder: 'offset, count' or '' (no keyword)

Statement Builder:
- select_builder: SELECT statement from a ClauseStore

Escaping:
    Only structured condition and assignment values go through ``escape``.
    Raw fragments, table names, field names, join text and order-by text are
    emitted verbatim.

Usage:
    from sql.clauses import ClauseStore, parse_where
    from sql.query_builder import select_builder

    store = ClauseStore(table='users')
    store.conditions.extend(parse_where('age >', 18))
    sql = select_builder(store, escape=driver.escape)
    # SELECT * FROM users WHERE AND age > 18
"""

from typing import Any, Callable, Dict, Iterable, List, Optional

from .clauses import (
    Assignment,
    ClauseStore,
    Condition,
    JoinClause,
    JoinEntry,
    Limit,
    SetEntry,
    WhereEntry,
)

EscapeFunc = Callable[[Any], str]


def fields_builder(select: str) -> str:
    """Return the SELECT field list, or '*' when none was given."""
    return select or '*'


def join_builder(joins: Iterable[JoinEntry]) -> str:
    """
    Build JOIN text from join entries.

    Args:
        joins: Raw strings and JoinClause objects

    Returns:
        Space separated JOIN text ('' when there are none)
    """
    parts = []
    for join in joins:
        if isinstance(join, JoinClause):
            parts.append(f"{join.relate} {join.table} ON({join.on})")
        elif join:
            parts.append(join)
    return " ".join(parts)


def where_builder(conditions: Iterable[WhereEntry], escape: EscapeFunc) -> str:
    """
    Build WHERE conditions.

    Structured entries render as ``RELATE FIELD OPERATE VALUE``; the relate
    keyword is kept on every entry, including the first.

    Args:
        conditions: Raw strings and Condition objects
        escape: Driver function rendering a value as a SQL literal

    Returns:
        Condition text without the WHERE keyword
    """
    parts = []
    for condition in conditions:
        if isinstance(condition, Condition):
            parts.append(
                f"{condition.relate} {condition.field} {condition.operate} {escape(condition.value)}"
            )
        elif condition:
            parts.append(condition)
    return " ".join(parts)


def set_builder(assignments: Iterable[SetEntry], escape: EscapeFunc) -> str:
    """
    Build SET assignments.

    Args:
        assignments: Raw strings (e.g. 'hits=hits+1') and Assignment objects
        escape: Driver function rendering a value as a SQL literal

    Returns:
        Comma separated assignment text without the SET keyword
    """
    parts = []
    for assignment in assignments:
        if isinstance(assignment, Assignment):
            parts.append(f"{assignment.field}={escape(assignment.value)}")
        elif assignment:
            parts.append(assignment)
    return ", ".join(parts)


def order_by_builder(order_by: Dict[str, Optional[str]]) -> str:
    """Build 'field DIR, field' text in insertion order."""
    return ", ".join(
        f"{field} {direction}" if direction else field
        for field, direction in order_by.items()
    )


def limit_builder(limit: Optional[Limit]) -> str:
    """Build 'offset, count' text, or '' when no limit is set."""
    if limit is None:
        return ""
    return f"{limit.offset}, {limit.count}"


def filter_clauses(store: ClauseStore, escape: EscapeFunc) -> List[str]:
    """
    Build the trailing WHERE / ORDER BY / LIMIT clauses shared by
    SELECT, UPDATE and DELETE, omitting the empty ones.
    """
    clauses = []

    where = where_builder(store.conditions, escape)
    if where:
        clauses.append(f"WHERE {where}")

    order_by = order_by_builder(store.order_by)
    if order_by:
        clauses.append(f"ORDER BY {order_by}")

    limit = limit_builder(store.limit)
    if limit:
        clauses.append(f"LIMIT {limit}")

    return clauses


def join_statement(parts: Iterable[str]) -> str:
    """Join statement parts with single spaces, dropping empty parts."""
    return " ".join(part for part in parts if part)


def select_builder(store: ClauseStore, escape: EscapeFunc) -> str:
    """
    Build a SELECT statement.

    Clause order:
        SELECT <fields> FROM <table> <joins> [WHERE] [ORDER BY] [LIMIT]

    Args:
        store: Accumulated clauses
        escape: Driver function rendering a value as a SQL literal

    Returns:
        SQL SELECT statement
    """
    return join_statement([
        "SELECT",
        fields_builder(store.select),
        "FROM",
        store.table,
        join_builder(store.joins),
        *filter_clauses(store, escape),
    ])
