"""Shared pytest fixtures."""

import logging

import pytest

from tests.helpers import write_sample_inputs

ENV_VARS = ("LOG_LEVEL", "LOG_FORMAT", "ENVIRONMENT", "MATCHER_DATA_DIR")


@pytest.fixture
def clean_env(monkeypatch):
    """Remove matcher environment variables so tests see defaults."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def restore_root_logger():
    """Restore root logger handlers and level after configure_logging() runs."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def sample_inputs(tmp_path):
    """Sample listings, products and stop words written to tmp_path."""
    return write_sample_inputs(tmp_path)
