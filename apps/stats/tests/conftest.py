"""Pytest fixtures for rollup service tests."""

from datetime import datetime

import pytest

# Mirror: use shared marker from tests.conftest (single source of truth)
from tests.conftest import requires_db  # noqa: F401


@pytest.fixture
def day1() -> datetime:
    return datetime(2020, 1, 5)
