"""
==================================
Fluent Active Record query builder.
==================================

ActiveRecord accumulates clauses through chained calls and ends the chain
with an execution method that renders the statement, resets the builder and
hands the SQL to a database driver.

Driver contract (any object providing):
    escape(value) -> str     SQL literal for a scalar value
    query(sql)    -> rows    list of row mappings for reads, or a write
                             result exposing insert_id, changed_rows and
                             affected_rows for writes

Lifecycle:
    1. Clause calls mutate the current ClauseStore and return the builder
    2. A terminal call takes the store, installs a fresh empty one and
       renders the SQL, recorded as the last SQL
    3. The SQL is dispatched inline or on the configured executor
    4. The raw driver result is mapped to the statement's return value

Terminal calls return a ``concurrent.futures.Future``. Malformed input raises
InvalidArgumentError straight away; driver errors are set on the future.
Invalid arguments to a terminal call also discard the pending statement, so
nothing half-built leaks into the next one.

A builder holds one statement at a time and has no locking. Use one builder
per thread of use; several builders may share one driver.

Example:
    >>> from sql.active_record import ActiveRecord
    >>> from utils.database_utils import create_driver
    >>>
    >>> db = ActiveRecord(create_driver('mysql+pymysql://app@localhost/shop'))
    >>> rows = (
    ...     db.select('id,name')
    ...     .from_('users')
    ...     .where('age >', 18)
    ...     .order_by('id', 'DESC')
    ...     .limit(0, 10)
    ...     .get()
    ...     .result()
    ... )
    >>> db.get_last_sql()
    'SELECT id,name FROM users WHERE AND age > 18 ORDER BY id DESC LIMIT 0, 10'
"""

import logging
from concurrent.futures import Executor, Future
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional, Protocol

from .clauses import (
    UNSET,
    ClauseStore,
    InvalidArgumentError,
    page_to_limit,
    parse_join,
    parse_limit,
    parse_order_by,
    parse_set,
    parse_where,
)
from .dml import delete_builder, insert_builder, update_builder
from .query_builder import select_builder

logger = logging.getLogger(__name__)

Row = Dict[str, Any]


class DatabaseDriver(Protocol):
    """What ActiveRecord needs from a database connection."""

    def escape(self, value: Any) -> str:
        ...

    def query(self, sql: str) -> Any:
        ...


def _rows(result: Any) -> List[Row]:
    """Map a read result to a list, never None."""
    return list(result) if result else []


def _first_row(result: Any) -> Optional[Row]:
    rows = _rows(result)
    return rows[0] if rows else None


def _insert_id(result: Any) -> Any:
    return result.insert_id


def _changed_rows(result: Any) -> int:
    return result.changed_rows


def _affected_rows(result: Any) -> int:
    return result.affected_rows


class ActiveRecord:
    """
    Chainable SQL builder bound to a database driver.

    Attributes:
        db: Driver providing escape() and query()
        executor: Optional executor used to dispatch statements; when None
            statements run inline and the returned future is already done

    Example:
        >>> db = ActiveRecord(driver)
        >>> db.insert('users', {'name': 'Bob'}).result()
        42
        >>> db.update('users', {'name': 'Carl'}, {'id': 5}).result()
        1
    """

    def __init__(self, db: DatabaseDriver, executor: Optional[Executor] = None):
        """
        Initialize the builder.

        Args:
            db: Driver object (connection adapter or pooled engine adapter)
            executor: Optional concurrent.futures executor for dispatch
        """
        self.db = db
        self.executor = executor
        self._last_sql = ''
        self._clause = ClauseStore()

    # ------------------------------------------------------------------
    # Clause definition
    # ------------------------------------------------------------------

    def select(self, fields: str) -> 'ActiveRecord':
        """Set the raw field list, e.g. 'f1, f2' or 't.*'. SELECT only."""
        self._clause.select = fields
        return self

    def from_(self, table: str) -> 'ActiveRecord':
        """Set the raw table expression, e.g. 'table1 t1, table2 t2'."""
        self._clause.table = table
        return self

    def where(self, key: Any, value: Any = UNSET) -> 'ActiveRecord':
        """
        Add WHERE conditions.

        Forms:
            where({'f1': 'v1', 'f2': 'v2'})          same as two where() calls
            where('AND `f1` = 123')                  raw, not escaped
            where(['OR 1=1', {'OR abc >=': 131}])    mixed list
            where('OR abc <', 123)                   key descriptor plus value

        A key descriptor is '[AND|OR] field [operator]'; relate defaults to
        AND and the operator to '='.

        Raises:
            InvalidArgumentError: On an unsupported input shape
        """
        self._clause.conditions.extend(parse_where(key, value))
        return self

    def join(self, table: str, on: Optional[str] = None, relate: Optional[str] = None) -> 'ActiveRecord':
        """
        Add a JOIN. Used by SELECT and UPDATE.

        Forms:
            join('LEFT JOIN t2 ON(t2.p1 = t3.p1)')           raw
            join('`table1` t1', 't1.f1=t2.f2')               LEFT join
            join('table1', '`f1`=`f2`', relate='RIGHT')      explicit kind
        """
        self._clause.joins.append(parse_join(table, on, relate))
        return self

    def set(self, key: Any, value: Any = UNSET) -> 'ActiveRecord':
        """
        Add SET assignments for UPDATE and INSERT.

        Accepts a field and value, a mapping, a raw fragment such as
        'hits=hits+1', or a list mixing those.
        """
        self._clause.assignments.extend(parse_set(key, value))
        return self

    def order_by(self, field: str, order: Optional[str] = None) -> 'ActiveRecord':
        """Add ORDER BY fields; a field given again keeps its position."""
        for name, direction in parse_order_by(field, order):
            self._clause.order_by[name] = direction
        return self

    def limit(self, offset: Any, count: Any = None) -> 'ActiveRecord':
        """Set LIMIT; ``limit(10)`` means offset 0, count 10."""
        self._clause.limit = parse_limit(offset, count)
        return self

    def limit_page(self, page: Any, per_page: Any) -> 'ActiveRecord':
        """Set LIMIT from a 1-indexed page and a page size (default 20)."""
        self._clause.limit = page_to_limit(page, per_page)
        return self

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    def get_last_sql(self) -> str:
        """Return the most recently rendered statement ('' if none yet)."""
        return self._last_sql

    def get(self, table: Optional[str] = None) -> Future:
        """Run a SELECT; resolves to a list of rows (empty if none)."""
        return self._execute(self._render_select(table), _rows)

    def get_one(self, table: Optional[str] = None) -> Future:
        """Run a SELECT with LIMIT 1; resolves to the first row or None."""
        self.limit(1)
        return self._execute(self._render_select(table), _first_row)

    def insert(self, table: str, data: Optional[Mapping[str, Any]] = None) -> Future:
        """
        Run an INSERT ... SET; resolves to the generated row id.

        Raises:
            InvalidArgumentError: If table is missing
        """
        with self._reset_on_error():
            if not table:
                raise InvalidArgumentError("Argument 1 of insert() (table) is required", position=1)
            assignments = parse_set(data) if data else []

        store = self._take_clauses()
        store.assignments.extend(assignments)
        sql = self._record(insert_builder(table, store, self.db.escape))
        return self._execute(sql, _insert_id)

    def update(
        self,
        table: Optional[str] = None,
        data: Optional[Mapping[str, Any]] = None,
        where: Any = None
    ) -> Future:
        """Run an UPDATE; resolves to the number of changed rows."""
        with self._reset_on_error():
            assignments = parse_set(data) if data else []
            conditions = parse_where(where) if where else []

        store = self._take_clauses()
        if table:
            store.table = table
        store.assignments.extend(assignments)
        store.conditions.extend(conditions)
        sql = self._record(update_builder(store, self.db.escape))
        return self._execute(sql, _changed_rows)

    def delete(self, table: Optional[str] = None, where: Any = None) -> Future:
        """Run a DELETE; resolves to the number of affected rows."""
        with self._reset_on_error():
            conditions = parse_where(where) if where else []

        store = self._take_clauses()
        if table:
            store.table = table
        store.conditions.extend(conditions)
        sql = self._record(delete_builder(store, self.db.escape))
        return self._execute(sql, _affected_rows)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _take_clauses(self) -> ClauseStore:
        """Hand the current store to the renderer and start an empty one."""
        store, self._clause = self._clause, ClauseStore()
        return store

    @contextmanager
    def _reset_on_error(self) -> Iterator[None]:
        """Discard the pending statement if a terminal call's arguments are invalid."""
        try:
            yield
        except InvalidArgumentError:
            self._clause = ClauseStore()
            raise

    def _record(self, sql: str) -> str:
        self._last_sql = sql
        return sql

    def _render_select(self, table: Optional[str]) -> str:
        if table:
            self.from_(table)
        store = self._take_clauses()
        return self._record(select_builder(store, self.db.escape))

    def _execute(self, sql: str, mapper: Callable[[Any], Any]) -> Future:
        """Dispatch SQL to the driver and map its result on completion."""
        logger.debug(f"Dispatching SQL: {sql}")

        if self.executor is not None:
            return self.executor.submit(self._run, sql, mapper)

        future: Future = Future()
        try:
            future.set_result(self._run(sql, mapper))
        except Exception as e:
            future.set_exception(e)
        return future

    def _run(self, sql: str, mapper: Callable[[Any], Any]) -> Any:
        return mapper(self.db.query(sql))
