"""
=============================================
Core infrastructure package for the builder.
=============================================

Centralized configuration and logging used by the query builder, the
SQLAlchemy driver and the command line entry point.

Modules:
    config: Configuration management from environment variables
    logger: Logging configuration and utilities

Example:
    >>> from core.config import config
    >>> from core.logger import get_logger
    >>>
    >>> logger = get_logger(__name__)
    >>> logger.info(f"Connecting to {config.database_url}")
"""

__version__ = "1.0.0"
__all__ = ['get_logger', 'setup_logging', 'config', 'Config']

from core.config import Config, config
from core.logger import get_logger, setup_logging
