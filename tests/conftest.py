"""Shared fixtures for tests."""

from datetime import datetime, timezone

import pytest

from timedate_mcp.catalog import TimezoneCatalog
from timedate_mcp.engine import TimeEngine

# Fixed clock for deterministic "now" handling
REFERENCE_NOW = datetime(2024, 6, 15, 12, 30, 45, tzinfo=timezone.utc)


@pytest.fixture(scope="session")
def catalog() -> TimezoneCatalog:
    return TimezoneCatalog.load()


@pytest.fixture
def engine(catalog: TimezoneCatalog) -> TimeEngine:
    return TimeEngine(catalog, clock=lambda: REFERENCE_NOW)
