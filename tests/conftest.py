"""
Pytest configuration and fixtures for logtar tests.
"""

import io
import shutil
import tempfile
from pathlib import Path

import pytest
import structlog

from logtar import config
from logtar.levels import INFO
from logtar.record import LogRecord


@pytest.fixture
def temp_dir():
    """Create a temporary directory for log files."""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path)
    shutil.rmtree(temp_path)


@pytest.fixture
def diag_stream():
    """Stream that receives handler diagnostics."""
    return io.StringIO()


@pytest.fixture
def diagnostics(diag_stream):
    """Diagnostic channel writing to diag_stream."""
    return structlog.PrintLogger(diag_stream)


@pytest.fixture
def make_record():
    """Factory for log records."""

    def _make(level=INFO, msg="Test message", name="test", **kwargs):
        return LogRecord(name=name, level=level, msg=msg, **kwargs)

    return _make


@pytest.fixture(autouse=True)
def clean_config():
    """Give every test the default global configuration."""
    config.reset_config()
    yield
    config.reset_config()
