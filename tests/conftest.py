"""Pytest fixtures for root-level tests (rollup integration, cron runner, guards)."""

import os

import pytest

os.environ.setdefault("ENV", "test")
os.environ.setdefault("PYTEST_RUNNING", "1")

from tests._db_bootstrap import clear_tables, postgres_reachable


def _db_is_postgres() -> bool:
    """True if the suite runs against a reachable Postgres (DATABASE_TEST_URL)."""
    return postgres_reachable(os.environ.get("DATABASE_TEST_URL"))


# Marker for tests that need Postgres: skip if DATABASE_TEST_URL not set or not reachable
requires_db = pytest.mark.skipif(
    not _db_is_postgres(),
    reason="DATABASE_TEST_URL not set or Postgres not reachable",
)


@pytest.fixture
def db():
    """Empty tables before the test. Yields nothing; use the repo functions for access."""
    clear_tables()
    yield
