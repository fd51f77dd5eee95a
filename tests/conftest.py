"""
Shared pytest fixtures and configuration for tempus tests.

This module provides:
- A pinned clock so "now"-dependent functions are deterministic
- A reference instant used across the function tests
- Settings cache isolation
"""

import logging
import sys
from pathlib import Path
from typing import Generator

import pytest
import structlog

# Ensure tempus package is importable
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from tempus.core.clock import FixedClock, use_clock
from tempus.core.logging import HANDLER_NAME
from tempus.core.settings import clear_settings_cache
from tempus.core.values import Timestamp


# =============================================================================
# Test Markers Configuration
# =============================================================================


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Auto-mark tests based on their location."""
    for item in items:
        test_path = Path(item.fspath).relative_to(Path(__file__).parent)

        if "cli" in test_path.parts:
            item.add_marker(pytest.mark.integration)

        markers = {mark.name for mark in item.iter_markers()}
        if not markers.intersection({"unit", "integration"}):
            item.add_marker(pytest.mark.unit)


# =============================================================================
# Clock and Settings Fixtures
# =============================================================================


# 2023-06-15T10:20:30Z, a Thursday in ISO week 24
REFERENCE_ISO = "2023-06-15T10:20:30Z"


@pytest.fixture
def reference() -> Timestamp:
    """The reference instant 2023-06-15T10:20:30Z."""
    return Timestamp.from_iso(REFERENCE_ISO)


@pytest.fixture
def fixed_clock(reference: Timestamp) -> Generator[FixedClock, None, None]:
    """
    Pin the clock to the reference instant for the duration of a test.

        def test_something(fixed_clock):
            assert now().unwrap().nanos == fixed_clock.nanos
    """
    with use_clock(FixedClock(reference.nanos)) as clock:
        yield clock


@pytest.fixture(autouse=True)
def reset_logging() -> Generator[None, None, None]:
    """Restore structlog defaults and the root logger after tests that configure logging."""
    root = logging.getLogger()
    level = root.level
    yield
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()
    for handler in list(root.handlers):
        if handler.get_name() == HANDLER_NAME:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


@pytest.fixture(autouse=True)
def clean_settings_cache() -> Generator[None, None, None]:
    """Clear cached settings before and after each test."""
    clear_settings_cache()
    yield
    clear_settings_cache()
