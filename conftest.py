"""Root conftest: test DB bootstrap and env apply to ALL test paths (tests/, apps/stats/tests/).

DATABASE_URL is forced before apps.stats.db is imported: DATABASE_TEST_URL when set
and reachable, otherwise a temporary SQLite file. A configured production DATABASE_URL is never used.
"""

import os
import tempfile

import pytest

os.environ.setdefault("ENV", "test")
os.environ.setdefault("PYTEST_RUNNING", "1")
os.environ.setdefault("CRON_LOG_DIR", os.path.join(tempfile.gettempdir(), "browser_stats_test_logs"))

from tests._db_bootstrap import postgres_reachable, run_test_db_schema_fixture, sqlite_test_url

DATABASE_TEST_URL = os.getenv("DATABASE_TEST_URL")
if DATABASE_TEST_URL and postgres_reachable(DATABASE_TEST_URL):
    os.environ["DATABASE_URL"] = DATABASE_TEST_URL
else:
    os.environ["DATABASE_URL"] = sqlite_test_url()
os.environ.pop("STATS_DIALECT", None)
os.environ.pop("TENANTS", None)


@pytest.fixture(scope="session", autouse=True)
def test_db_schema():
    """Reset test DB schema at session start.
    Safety: a Postgres db name must contain '_test' or ALLOW_TEST_DB_RESET=true."""
    run_test_db_schema_fixture()
