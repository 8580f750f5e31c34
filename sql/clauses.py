"""
=====================================
Clause Store and Clause Input Parsers.
=====================================

This module holds the accumulated, not-yet-rendered state of one statement
and the pure functions that normalize caller input into it.

Canonical entries:
- Raw fragments are stored as plain ``str`` and rendered verbatim
- Condition: structured WHERE entry (relate, field, operate, value)
- Assignment: structured SET entry (field, value)
- JoinClause: structured JOIN entry (relate, table, on)
- Limit: offset/count pair

Parsers:
- parse_key_descriptor: 'OR age >=' style WHERE keys
- parse_where / parse_set: raw string, list, mapping or key/value input
- parse_join: raw or structured JOIN
- parse_order_by: 'a DESC, b' style ORDER BY input
- parse_limit / page_to_limit: LIMIT values and page arithmetic

Usage:
    from sql.clauses import ClauseStore, parse_where

    store = ClauseStore()
    store.conditions.extend(parse_where({'status': 'active', 'OR age >': 18}))
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union

DEFAULT_RELATE = 'AND'
DEFAULT_OPERATE = '='
DEFAULT_JOIN_RELATE = 'LEFT'
DEFAULT_PER_PAGE = 20

RELATE_KEYWORDS = ('AND', 'OR')


class _Unset:
    """Marker for an omitted optional argument (``None`` is a valid value)."""

    def __repr__(self):
        return '<unset>'


UNSET = _Unset()


class InvalidArgumentError(ValueError):
    """Exception raised for malformed clause input or a missing parameter.

    Attributes:
        position: 1-based position of the offending argument, if known
    """

    def __init__(self, message: str, position: Optional[int] = None):
        self.position = position
        super().__init__(message)


@dataclass(frozen=True)
class Condition:
    """Structured WHERE condition."""

    relate: str
    field: str
    operate: str
    value: Any


@dataclass(frozen=True)
class Assignment:
    """Structured SET assignment."""

    field: str
    value: Any


@dataclass(frozen=True)
class JoinClause:
    """Structured JOIN entry, rendered as ``RELATE TABLE ON(ON)``."""

    relate: str
    table: str
    on: str


@dataclass(frozen=True)
class Limit:
    """LIMIT offset/count pair. ``Limit(0, 0)`` is a real value, not unset."""

    offset: int
    count: int


WhereEntry = Union[str, Condition]
SetEntry = Union[str, Assignment]
JoinEntry = Union[str, JoinClause]


@dataclass
class ClauseStore:
    """Accumulated clause state for a single statement.

    Attributes:
        select: Raw field list ('' means '*')
        table: Raw table expression
        joins: JOIN entries in render order
        assignments: SET entries in render order
        conditions: WHERE entries in render order
        order_by: Field to direction mapping, insertion ordered
        limit: Optional LIMIT pair
    """

    select: str = ''
    table: str = ''
    joins: List[JoinEntry] = field(default_factory=list)
    assignments: List[SetEntry] = field(default_factory=list)
    conditions: List[WhereEntry] = field(default_factory=list)
    order_by: Dict[str, Optional[str]] = field(default_factory=dict)
    limit: Optional[Limit] = None

    def is_empty(self) -> bool:
        """Return True when no clause has been recorded."""
        return self == ClauseStore()


def parse_key_descriptor(descriptor: str) -> Tuple[str, str, str]:
    """
    Split a WHERE key descriptor into (relate, field, operate).

    Grammar, on whitespace-separated tokens:
        'field'              -> ('AND', field, '=')
        'OR field'           -> ('OR', field, '=')
        'field >='           -> ('AND', field, '>=')
        'OR field >= extra'  -> ('OR', field, '>='), trailing tokens ignored

    In the two-token form a leading AND/OR always wins over reading the
    second token as an operator.

    Args:
        descriptor: Key descriptor string

    Returns:
        Tuple of relate, field and operate

    Raises:
        InvalidArgumentError: If the descriptor has no tokens
    """
    parts = descriptor.split()

    if not parts:
        raise InvalidArgumentError("Where key descriptor must not be empty", position=1)

    if len(parts) == 1:
        return DEFAULT_RELATE, parts[0], DEFAULT_OPERATE

    if len(parts) == 2:
        head = parts[0].upper()
        if head in RELATE_KEYWORDS:
            return head, parts[1], DEFAULT_OPERATE
        return DEFAULT_RELATE, parts[0], parts[1]

    return parts[0], parts[1], parts[2]


def parse_where(key: Any, value: Any = UNSET) -> List[WhereEntry]:
    """
    Normalize ``where`` input into canonical WHERE entries.

    Accepted shapes:
        where('a = 1')                       raw fragment, not escaped
        where(['a = 1', {'OR b >': 2}])      each element parsed on its own
        where({'a': 1, 'OR b >': 2})         each pair parsed as where(k, v)
        where('OR b >', 2)                   key descriptor plus value

    Args:
        key: Raw fragment, sequence, mapping or key descriptor
        value: Condition value; omit for the single-argument forms

    Returns:
        List of raw strings and Condition objects in input order

    Raises:
        InvalidArgumentError: On an unsupported shape
    """
    if value is UNSET:
        if isinstance(key, str):
            return [key]
        if isinstance(key, (list, tuple)):
            entries: List[WhereEntry] = []
            for item in key:
                entries.extend(parse_where(item))
            return entries
        if isinstance(key, Mapping):
            entries = []
            for field_key, field_value in key.items():
                entries.extend(parse_where(field_key, field_value))
            return entries
        raise InvalidArgumentError(
            f"Argument 1 of where() must be a string, sequence or mapping, "
            f"got {type(key).__name__}",
            position=1
        )

    if key is None or key is UNSET:
        raise InvalidArgumentError("Argument 1 of where() is required when a value is given", position=1)
    if not isinstance(key, str):
        raise InvalidArgumentError(
            f"Argument 1 of where() must be a key descriptor string, got {type(key).__name__}",
            position=1
        )

    relate, field_name, operate = parse_key_descriptor(key)
    return [Condition(relate=relate, field=field_name, operate=operate, value=value)]


def parse_set(key: Any, value: Any = UNSET) -> List[SetEntry]:
    """
    Normalize ``set`` input into canonical SET entries.

    Same single-argument branching as parse_where (raw, sequence, mapping);
    the two-argument form is always a plain field/value assignment.

    Raises:
        InvalidArgumentError: On an unsupported shape
    """
    if value is UNSET:
        if isinstance(key, str):
            return [key]
        if isinstance(key, (list, tuple)):
            entries: List[SetEntry] = []
            for item in key:
                entries.extend(parse_set(item))
            return entries
        if isinstance(key, Mapping):
            return [Assignment(field=k, value=v) for k, v in key.items()]
        raise InvalidArgumentError(
            f"Argument 1 of set() must be a string, sequence or mapping, "
            f"got {type(key).__name__}",
            position=1
        )

    if key is None or key is UNSET:
        raise InvalidArgumentError("Argument 1 of set() is required when a value is given", position=1)

    return [Assignment(field=key, value=value)]


def parse_join(table: str, on: Optional[str] = None, relate: Optional[str] = None) -> JoinEntry:
    """
    Normalize ``join`` input.

    Args:
        table: Table expression, or the whole raw JOIN text when ``on`` is None
        on: Condition placed inside ON(...)
        relate: Join kind (LEFT, RIGHT, INNER, ...); defaults to LEFT

    Returns:
        Raw string or JoinClause
    """
    if on is None:
        if relate is not None:
            raise InvalidArgumentError("join() with a relate also needs an on condition", position=2)
        return table
    return JoinClause(relate=relate or DEFAULT_JOIN_RELATE, table=table, on=on)


def parse_order_by(field_spec: str, order: Optional[str] = None) -> List[Tuple[str, Optional[str]]]:
    """
    Split ORDER BY input into (field, direction) pairs.

    ``parse_order_by('id', 'DESC')`` and ``parse_order_by('id DESC, name')``
    are both accepted. A missing direction is returned as None.
    """
    if order is not None:
        field_spec = f"{field_spec} {order}"

    pairs = []
    for part in field_spec.split(','):
        tokens = part.split()
        if not tokens:
            continue
        pairs.append((tokens[0], tokens[1] if len(tokens) > 1 else None))
    return pairs


def _to_count(value: Any) -> int:
    """Coerce a LIMIT value to a non-negative int; unparsable input becomes 0."""
    try:
        number = int(value)
    except (TypeError, ValueError):
        return 0
    return max(number, 0)


def parse_limit(offset: Any, count: Any = None) -> Limit:
    """
    Build a Limit; a single argument is the row count with offset 0.

    Examples:
        parse_limit(5)      -> Limit(0, 5)
        parse_limit(10, 20) -> Limit(10, 20)
    """
    if count is None:
        offset, count = 0, offset
    return Limit(offset=_to_count(offset), count=_to_count(count))


def page_to_limit(page: Any, per_page: Any) -> Limit:
    """
    Translate a 1-indexed page into a Limit.

    Pages below 1 are read as page 1, and page sizes below 1 as
    DEFAULT_PER_PAGE, so ``page_to_limit(0, 0) == page_to_limit(1, 20)``.
    """
    page = _to_count(page) or 1
    per_page = _to_count(per_page) or DEFAULT_PER_PAGE
    return parse_limit((page - 1) * per_page, per_page)
