"""
==============================================
Centralized logging setup for the query layer.
==============================================

Library modules only ever call ``logging.getLogger(__name__)``; handlers are
attached by the application (``main.py``) through ``setup_logging``.

Provides:
- Console output with optional ANSI colours
- Optional file output
- Level taken from configuration unless overridden

Example:
    >>> from core.logger import get_logger, setup_logging
    >>>
    >>> setup_logging(log_level='DEBUG', log_file='queries.log')
    >>> logger = get_logger(__name__)
    >>> logger.debug("SELECT * FROM users")
"""

import logging
import sys
from pathlib import Path
from typing import Optional

from core.config import config

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


class ColoredFormatter(logging.Formatter):
    """Formatter that colours the level name for terminal output.

    Attributes:
        COLORS: Dict mapping log levels to ANSI color codes
    """

    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
    }
    RESET = '\033[0m'

    def format(self, record):
        """Format a record with its level name wrapped in colour codes.

        The record is restored afterwards so other handlers see plain text.
        """
        original = record.levelname
        color = self.COLORS.get(original)
        if color:
            record.levelname = f"{color}{original}{self.RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname = original


def get_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """Get a logger instance for the specified module.

    Args:
        name: Logger name (typically __name__ of calling module)
        level: Optional logging level override (DEBUG/INFO/WARNING/ERROR/CRITICAL)

    Returns:
        Logger instance
    """
    logger = logging.getLogger(name)

    if level:
        logger.setLevel(getattr(logging, level.upper()))

    return logger


def setup_logging(
    log_level: Optional[str] = None,
    log_file: Optional[str] = None,
    log_dir: Optional[str] = None,
    console_output: bool = True,
    use_colors: bool = True
) -> None:
    """Configure the root logger with console and/or file handlers.

    Should be called once at application startup.

    Args:
        log_level: Logging level (defaults to config.log_level)
        log_file: Optional log file name (defaults to config.log_file)
        log_dir: Optional log directory path (defaults to 'logs/')
        console_output: If True, output to stderr
        use_colors: If True, colour console level names
    """
    level = getattr(logging, (log_level or config.log_level).upper())
    log_file = log_file or config.log_file

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    if console_output:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level)
        formatter_cls = ColoredFormatter if use_colors else logging.Formatter
        console_handler.setFormatter(formatter_cls(LOG_FORMAT, datefmt=DATE_FORMAT))
        root_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_dir) if log_dir else Path('logs')
        log_path.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path / log_file, encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        root_logger.addHandler(file_handler)
