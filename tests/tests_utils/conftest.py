"""
Shared fixtures for utils/ tests.

Key fixtures:
- sqlite_engine: in-memory SQLite engine seeded with a small users table
- sqlite_driver: SQLAlchemyDriver over sqlite_engine
"""

import pytest
from sqlalchemy import create_engine


@pytest.fixture
def sqlite_engine():
    """In-memory SQLite engine with a seeded users table."""
    engine = create_engine("sqlite://")
    with engine.begin() as conn:
        conn.exec_driver_sql(
            "CREATE TABLE users (id INTEGER PRIMARY KEY AUTOINCREMENT, name TEXT, age INTEGER)"
        )
        conn.exec_driver_sql(
            "INSERT INTO users (name, age) VALUES ('Ann', 31), ('Bob', 17), ('Carl', 45)"
        )
    yield engine
    engine.dispose()


@pytest.fixture
def sqlite_driver(sqlite_engine):
    """SQLAlchemyDriver bound to the seeded SQLite engine."""
    from utils.database_utils import SQLAlchemyDriver

    return SQLAlchemyDriver(sqlite_engine)
