"""Pytest configuration for all tests."""

from typing import Generator

import pytest
import structlog

from mimsy.core.config import get_settings
from mimsy.domain.services.registry import clear_registry


@pytest.fixture(autouse=True)
def _clean_registry() -> Generator[None, None, None]:
    """Start and finish every test with an empty process-wide registry."""
    clear_registry()
    yield
    clear_registry()


@pytest.fixture(autouse=True)
def _reset_logging() -> Generator[None, None, None]:
    """Undo logging configuration done by CLI commands during a test."""
    yield
    structlog.reset_defaults()


@pytest.fixture(autouse=True)
def _fresh_settings() -> Generator[None, None, None]:
    """Reload settings from the environment for every test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
