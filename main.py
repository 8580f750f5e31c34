"""
===============================================
Command line entry point for the query builder.
===============================================

Builds a SELECT with ActiveRecord from command line options, runs it
against the configured database and prints the rows and the executed SQL.

Usage:
    # All rows of a table
    python main.py --table users

    # Filtered, ordered, paginated
    python main.py --table users --fields id,name --where "age >" 18 \\
        --order "id DESC" --page 2 --per-page 10

    # Single row against a specific database
    python main.py --url sqlite:///shop.db --table users --where id 5 --one

Example:
    >>> from main import main
    >>> main(['--table', 'users', '--limit', '5'])
    0
"""

import argparse
import json
import sys
from typing import Any, List, Optional

from sqlalchemy.exc import SQLAlchemyError

from core.logger import get_logger, setup_logging
from sql.active_record import ActiveRecord
from sql.clauses import InvalidArgumentError
from utils.database_utils import DriverFailureError, create_driver

logger = get_logger(__name__)


def coerce_value(value: str) -> Any:
    """Read integer-looking CLI values as int, leave everything else as str."""
    try:
        return int(value)
    except ValueError:
        return value


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        description="Fluent SQL builder - run a SELECT from the command line",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py --table users --where "age >" 18 --order "id DESC" --limit 10
  python main.py --table users --raw-where "name LIKE 'B%'" --one
        """
    )

    parser.add_argument('--url', type=str, help='Database URL (defaults to ACTIVE_RECORD_DATABASE_URL)')
    parser.add_argument('--table', type=str, required=True, help='Table expression for FROM')
    parser.add_argument('--fields', type=str, default='', help="Field list, e.g. 'id,name'")
    parser.add_argument(
        '--join',
        nargs=2,
        action='append',
        default=[],
        metavar=('TABLE', 'ON'),
        help='LEFT JOIN TABLE ON(ON); repeatable'
    )
    parser.add_argument(
        '--where',
        nargs=2,
        action='append',
        default=[],
        metavar=('KEY', 'VALUE'),
        help="Condition such as 'OR age >=' 18; repeatable"
    )
    parser.add_argument(
        '--raw-where',
        action='append',
        default=[],
        help='Raw condition fragment (not escaped); repeatable'
    )
    parser.add_argument('--order', action='append', default=[], help="ORDER BY text, e.g. 'id DESC'")
    parser.add_argument('--limit', type=int, help='Maximum number of rows')
    parser.add_argument('--offset', type=int, default=0, help='Rows to skip (with --limit)')
    parser.add_argument('--page', type=int, help='1-indexed page number')
    parser.add_argument('--per-page', type=int, default=20, help='Rows per page (with --page)')
    parser.add_argument('--one', action='store_true', help='Return only the first row')
    parser.add_argument('--verbose', action='store_true', help='Enable DEBUG logging')

    return parser


def build_query(db: ActiveRecord, args: argparse.Namespace) -> ActiveRecord:
    """Apply parsed options to the builder."""
    if args.fields:
        db.select(args.fields)
    db.from_(args.table)

    for table, on in args.join:
        db.join(table, on)
    for key, value in args.where:
        db.where(key, coerce_value(value))
    for fragment in args.raw_where:
        db.where(fragment)
    for order in args.order:
        db.order_by(order)

    if args.page is not None:
        db.limit_page(args.page, args.per_page)
    elif args.limit is not None:
        db.limit(args.offset, args.limit)

    return db


def main(argv: Optional[List[str]] = None, driver: Any = None) -> int:
    """
    Run the CLI.

    Args:
        argv: Argument list (defaults to sys.argv[1:])
        driver: Optional driver, mainly for tests; built from --url otherwise

    Exit Codes:
        0: Success
        1: Invalid arguments, bad database URL or database error
    """
    args = build_parser().parse_args(argv)
    setup_logging(log_level='DEBUG' if args.verbose else None)

    owned = driver is None
    try:
        if owned:
            driver = create_driver(args.url)
        db = ActiveRecord(driver)
        build_query(db, args)
        if args.one:
            row = db.get_one().result()
            rows = [row] if row is not None else []
        else:
            rows = db.get().result()
    except (InvalidArgumentError, DriverFailureError, SQLAlchemyError) as e:
        logger.error(f"❌ {e}")
        return 1
    finally:
        if owned and driver is not None:
            driver.dispose()

    for row in rows:
        print(json.dumps(row, default=str))
    logger.info(f"{len(rows)} row(s): {db.get_last_sql()}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
