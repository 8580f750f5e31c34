"""
Test suite for core.logger.

Tests cover:
- setup_logging handler wiring (console, file, colours)
- ColoredFormatter leaves records untouched for other handlers
- get_logger level override
"""

import logging

import pytest

from core.logger import ColoredFormatter, get_logger, setup_logging


@pytest.fixture
def restore_root_logger():
    """Snapshot and restore root logger handlers and level."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.mark.unit
def test_setup_logging_console_only(restore_root_logger):
    setup_logging(log_level='WARNING', log_file=None, use_colors=False)

    root = restore_root_logger
    assert root.level == logging.WARNING
    assert len(root.handlers) == 1
    assert not isinstance(root.handlers[0].formatter, ColoredFormatter)


@pytest.mark.unit
def test_setup_logging_with_file(restore_root_logger, tmp_path):
    setup_logging(log_level='DEBUG', log_file='queries.log', log_dir=str(tmp_path), console_output=False)

    logging.getLogger('tests.logger').debug("SELECT 1")
    for handler in restore_root_logger.handlers:
        handler.flush()

    assert "SELECT 1" in (tmp_path / 'queries.log').read_text(encoding='utf-8')


@pytest.mark.unit
def test_colored_formatter_restores_levelname():
    formatter = ColoredFormatter('%(levelname)s %(message)s')
    record = logging.LogRecord('x', logging.ERROR, __file__, 1, 'boom', None, None)

    output = formatter.format(record)

    assert '\033[31mERROR\033[0m boom' == output
    assert record.levelname == 'ERROR'


@pytest.mark.unit
def test_get_logger_level_override():
    logger = get_logger('tests.logger.override', level='error')

    assert logger.level == logging.ERROR
