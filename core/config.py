"""
===============================================
Configuration management for the query builder.
===============================================

Loads settings from environment variables (.env file) and exposes a
centralized Config singleton for application-wide access.

The configuration covers:
- The database URL handed to SQLAlchemy when no engine is supplied
- Statement dispatch (inline or on a thread pool)
- Logging level and optional log file

Example:
    >>> from core.config import config
    >>>
    >>> # Database connection
    >>> engine_url = config.database_url
    >>>
    >>> # Dispatch settings
    >>> print(f"Workers: {config.max_workers}")
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load environment variables from .env file
env_path = Path(__file__).parent.parent / '.env'
load_dotenv(dotenv_path=env_path)

_TRUE_VALUES = ('1', 'true', 'yes', 'on')


def env_bool(name: str, default: bool = False) -> bool:
    """Read a boolean environment variable.

    Args:
        name: Variable name
        default: Value used when the variable is unset or blank

    Returns:
        True for 1/true/yes/on (case-insensitive), False otherwise
    """
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in _TRUE_VALUES


def env_int(name: str, default: int = 0) -> int:
    """Read an integer environment variable, falling back on bad input."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


@dataclass
class DatabaseConfig:
    """Database configuration settings.

    Attributes:
        url: SQLAlchemy database URL (e.g. mysql+pymysql://user:pw@host/db)
        echo: Enable SQLAlchemy statement echo
    """

    url: str
    echo: bool = False


@dataclass
class BuilderConfig:
    """Query builder runtime settings.

    Attributes:
        max_workers: Thread pool size for statement dispatch (0 = inline)
        log_level: Logging level name
        log_file: Optional log file name
    """

    max_workers: int = 0
    log_level: str = 'INFO'
    log_file: Optional[str] = None


class Config:
    """Centralized configuration manager.

    Attributes:
        db: DatabaseConfig instance
        builder: BuilderConfig instance

    Example:
        >>> config = Config()
        >>> print(f"Connecting to {config.database_url}")
    """

    def __init__(self):
        """Initialize configuration from environment variables."""
        self.db = DatabaseConfig(
            url=os.getenv('ACTIVE_RECORD_DATABASE_URL', 'sqlite:///:memory:'),
            echo=env_bool('ACTIVE_RECORD_ECHO', False)
        )

        self.builder = BuilderConfig(
            max_workers=max(0, env_int('ACTIVE_RECORD_MAX_WORKERS', 0)),
            log_level=os.getenv('ACTIVE_RECORD_LOG_LEVEL', 'INFO').upper(),
            log_file=os.getenv('ACTIVE_RECORD_LOG_FILE') or None
        )

    @property
    def database_url(self) -> str:
        """Get the SQLAlchemy database URL."""
        return self.db.url

    @property
    def echo(self) -> bool:
        """Get the SQLAlchemy echo flag."""
        return self.db.echo

    @property
    def max_workers(self) -> int:
        """Get the dispatch thread pool size."""
        return self.builder.max_workers

    @property
    def log_level(self) -> str:
        """Get the logging level name."""
        return self.builder.log_level

    @property
    def log_file(self) -> Optional[str]:
        """Get the optional log file name."""
        return self.builder.log_file


# Global configuration instance
config = Config()
