"""
Test suite for core.config.

Tests cover:
- Environment defaults when nothing is set
- Overrides read from environment variables
- Boolean / integer parsing fallbacks
"""

import pytest

from core.config import BuilderConfig, Config, DatabaseConfig, env_bool, env_int

ENV_VARS = (
    'ACTIVE_RECORD_DATABASE_URL',
    'ACTIVE_RECORD_ECHO',
    'ACTIVE_RECORD_MAX_WORKERS',
    'ACTIVE_RECORD_LOG_LEVEL',
    'ACTIVE_RECORD_LOG_FILE',
)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every ACTIVE_RECORD_* variable for the test."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.mark.unit
def test_config_defaults(clean_env):
    cfg = Config()

    assert cfg.database_url == 'sqlite:///:memory:'
    assert cfg.echo is False
    assert cfg.max_workers == 0
    assert cfg.log_level == 'INFO'
    assert cfg.log_file is None
    assert isinstance(cfg.db, DatabaseConfig)
    assert isinstance(cfg.builder, BuilderConfig)


@pytest.mark.unit
def test_config_reads_environment(clean_env):
    clean_env.setenv('ACTIVE_RECORD_DATABASE_URL', 'mysql+pymysql://app@db/shop')
    clean_env.setenv('ACTIVE_RECORD_ECHO', 'yes')
    clean_env.setenv('ACTIVE_RECORD_MAX_WORKERS', '4')
    clean_env.setenv('ACTIVE_RECORD_LOG_LEVEL', 'debug')
    clean_env.setenv('ACTIVE_RECORD_LOG_FILE', 'queries.log')

    cfg = Config()

    assert cfg.database_url == 'mysql+pymysql://app@db/shop'
    assert cfg.echo is True
    assert cfg.max_workers == 4
    assert cfg.log_level == 'DEBUG'
    assert cfg.log_file == 'queries.log'


@pytest.mark.edge_case
def test_negative_worker_count_means_inline(clean_env):
    clean_env.setenv('ACTIVE_RECORD_MAX_WORKERS', '-2')

    assert Config().max_workers == 0


@pytest.mark.edge_case
@pytest.mark.parametrize("raw, expected", [
    ('1', True), ('TRUE', True), (' on ', True), ('0', False), ('nope', False), ('', False),
])
def test_env_bool(monkeypatch, raw, expected):
    monkeypatch.setenv('AR_TEST_FLAG', raw)

    assert env_bool('AR_TEST_FLAG') is expected


@pytest.mark.edge_case
@pytest.mark.parametrize("raw, expected", [('8', 8), ('eight', 3), ('  ', 3)])
def test_env_int(monkeypatch, raw, expected):
    monkeypatch.setenv('AR_TEST_NUMBER', raw)

    assert env_int('AR_TEST_NUMBER', 3) == expected
