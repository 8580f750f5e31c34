"""
Shared fixtures and fakes for sql/ package tests.

Key fixtures:
- fake_driver_factory: builds FakeDriver instances with a canned result or error
- fake_driver: FakeDriver returning no rows
- builder: ActiveRecord bound to fake_driver with inline dispatch
"""

import pytest


class FakeDriver:
    """
    In-memory stand-in for a database driver.

    escape() renders MySQL-style literals; query() records every statement
    and returns the canned result (or raises the canned error).
    """

    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.queries = []

    def escape(self, value):
        if value is None:
            return 'NULL'
        if isinstance(value, bool):
            return 'TRUE' if value else 'FALSE'
        if isinstance(value, (int, float)):
            return str(value)
        return "'" + str(value).replace("'", "\\'") + "'"

    def query(self, sql):
        self.queries.append(sql)
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def fake_driver_factory():
    """Factory for FakeDriver instances."""
    def factory(result=None, error=None):
        return FakeDriver(result=result, error=error)

    return factory


@pytest.fixture
def fake_driver(fake_driver_factory):
    """FakeDriver that returns no rows."""
    return fake_driver_factory()


@pytest.fixture
def escape(fake_driver):
    """The fake driver's escape function."""
    return fake_driver.escape


@pytest.fixture
def builder(fake_driver):
    """ActiveRecord over the fake driver, dispatching inline."""
    from sql.active_record import ActiveRecord

    return ActiveRecord(fake_driver)
