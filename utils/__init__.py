"""
==========================
Utility Functions Package.
==========================

Database driver helpers used by the ActiveRecord builder.

Modules:
    database_utils: SQLAlchemy-backed driver, engine and executor factories
"""

__version__ = "1.0.0"
__all__ = [
    'SQLAlchemyDriver',
    'WriteResult',
    'DriverFailureError',
    'create_sqlalchemy_engine',
    'create_driver',
    'create_executor'
]

from .database_utils import (
    DriverFailureError,
    SQLAlchemyDriver,
    WriteResult,
    create_driver,
    create_executor,
    create_sqlalchemy_engine,
)
