"""Shared fixtures for CLI module tests."""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from dyeprofile.cli.utils import shutdown_logging


@pytest.fixture
def runner() -> CliRunner:
    """Create a Click test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _reset_logging():
    """Detach run-log handlers a command may have left behind."""
    yield
    shutdown_logging()
