"""
==============================================
Fluent SQL construction package.
==============================================

This package builds SELECT, INSERT, UPDATE and DELETE statements from
chained clause calls and dispatches them to a database driver.

The package follows a clear organization:
    - clauses.py: Clause Store, canonical entries and input parsers
    - query_builder.py: Fragment builders and SELECT assembly (_builder suffix)
    - dml.py: INSERT / UPDATE / DELETE assembly
    - active_record.py: The chainable ActiveRecord builder and its lifecycle

Architecture:
    - Parsers and builders are pure functions (no side effects)
    - ActiveRecord owns one ClauseStore and swaps in a new one per statement
    - Value escaping is delegated to the driver's escape()

Example:
    >>> from sql import ActiveRecord
    >>> from utils.database_utils import create_driver
    >>>
    >>> db = ActiveRecord(create_driver())
    >>> db.where({'status': 'active'}).get('users').result()
"""

__version__ = "1.0.0"
__all__ = [
    # Builder
    'ActiveRecord', 'DatabaseDriver',
    # Clause model
    'ClauseStore', 'Condition', 'Assignment', 'JoinClause', 'Limit',
    'InvalidArgumentError',
    # Statement builders
    'select_builder', 'insert_builder', 'update_builder', 'delete_builder',
]

from .active_record import ActiveRecord, DatabaseDriver
from .clauses import (
    Assignment,
    ClauseStore,
    Condition,
    InvalidArgumentError,
    JoinClause,
    Limit,
)
from .dml import delete_builder, insert_builder, update_builder
from .query_builder import select_builder
