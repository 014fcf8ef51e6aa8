"""Shared test DB bootstrap (guard + schema creation). Used by root conftest for all test paths.

Default target is a throwaway SQLite file; DATABASE_TEST_URL points the suite at Postgres instead.
"""

import logging
import os
import tempfile
from pathlib import Path
from urllib.parse import urlparse

_ROOT = Path(__file__).resolve().parent.parent

_LOG = logging.getLogger(__name__)

TEST_SCHEMA_STRATEGY_DEFAULT = "alembic"

SQLITE_TEST_PATH = Path(tempfile.gettempdir()) / "browser_stats_test.sqlite3"


def sqlite_test_url() -> str:
    return f"sqlite:///{SQLITE_TEST_PATH}"


def get_test_schema_strategy() -> str:
    """Return TEST_SCHEMA_STRATEGY: 'alembic' (default) or 'ensure_tables'."""
    v = (os.environ.get("TEST_SCHEMA_STRATEGY") or TEST_SCHEMA_STRATEGY_DEFAULT).strip().lower()
    if v not in ("alembic", "ensure_tables"):
        raise RuntimeError(
            f"TEST_SCHEMA_STRATEGY must be 'alembic' or 'ensure_tables'. Got: {v!r}. "
            "Fix: export TEST_SCHEMA_STRATEGY=alembic  # or ensure_tables"
        )
    return v


def parse_db_name(url: str) -> str:
    """Extract database name from postgres URL (path without leading slash)."""
    p = urlparse(url)
    path = (p.path or "").strip("/")
    return path.split("/")[0] if path else ""


def assert_schema_reset_safe(url: str) -> None:
    """Raise RuntimeError if schema reset is not allowed (safety check).
    Allowed when: SQLite, db name contains '_test', or ALLOW_TEST_DB_RESET=true."""
    if url.startswith("sqlite"):
        return
    if os.environ.get("ALLOW_TEST_DB_RESET", "").lower() in ("1", "true", "yes"):
        return
    db_name = parse_db_name(url)
    if "_test" in db_name:
        return
    raise RuntimeError(
        f"Schema reset blocked: DATABASE_TEST_URL db name must contain '_test' "
        f"or set ALLOW_TEST_DB_RESET=true. Got db: {db_name!r}"
    )


def postgres_reachable(url: str | None, timeout: int = 2) -> bool:
    """Return True if Postgres at url is reachable. Uses short timeout to avoid flaky CI."""
    if not url or not url.strip().lower().startswith("postgresql"):
        return False
    eng = None
    try:
        from sqlalchemy import create_engine

        eng = create_engine(url, connect_args={"connect_timeout": timeout})
        with eng.connect():
            return True
    except Exception:
        return False
    finally:
        if eng is not None:
            eng.dispose()


def run_alembic_upgrade(db_url: str) -> None:
    """Run alembic upgrade head against db_url. Idempotent."""
    from alembic import command
    from alembic.config import Config

    cfg = Config(str(_ROOT / "alembic.ini"))
    cfg.set_main_option("script_location", str(_ROOT / "alembic"))
    cfg.set_main_option("sqlalchemy.url", db_url)
    command.upgrade(cfg, "head")
    _LOG.info("Ran alembic upgrade head")


def run_test_db_schema_fixture() -> None:
    """Drop and recreate the schema on the engine apps.stats.db was built with."""
    from sqlalchemy import text

    from apps.stats.db import drop_tables, engine, ensure_tables

    url = engine.url.render_as_string(hide_password=False)
    assert_schema_reset_safe(url)
    drop_tables()
    if engine.dialect.name == "postgresql" and get_test_schema_strategy() == "alembic":
        with engine.begin() as conn:
            conn.execute(text("DROP TABLE IF EXISTS alembic_version"))
        run_alembic_upgrade(url)
        return
    ensure_tables()


def clear_tables() -> None:
    """Delete every row from every model table (children before parents)."""
    from apps.stats.db import engine
    from apps.stats.models import Base

    with engine.begin() as conn:
        for table in reversed(Base.metadata.sorted_tables):
            conn.execute(table.delete())
