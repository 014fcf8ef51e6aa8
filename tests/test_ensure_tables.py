"""ensure_tables(): SQLite always gets create_all; Postgres only in tests with TEST_SCHEMA_STRATEGY=ensure_tables."""

from types import SimpleNamespace

from sqlalchemy import create_engine, inspect

from apps.stats.db import ensure_tables
from apps.stats.models import Base

_POSTGRES_BIND = SimpleNamespace(dialect=SimpleNamespace(name="postgresql"))


def test_sqlite_creates_all_tables() -> None:
    engine = create_engine("sqlite://")
    ensure_tables(engine)
    assert {"sites", "hits", "browser_stats"} <= set(inspect(engine).get_table_names())
    ensure_tables(engine)  # idempotent
    engine.dispose()


def test_postgres_no_op_when_strategy_alembic(monkeypatch) -> None:
    monkeypatch.setenv("ENV", "test")
    monkeypatch.setenv("TEST_SCHEMA_STRATEGY", "alembic")
    calls = []
    monkeypatch.setattr(Base.metadata, "create_all", lambda *a, **kw: calls.append(1))
    ensure_tables(_POSTGRES_BIND)
    assert calls == []


def test_postgres_no_op_outside_tests(monkeypatch) -> None:
    monkeypatch.setenv("ENV", "production")
    monkeypatch.setenv("PYTEST_RUNNING", "0")
    monkeypatch.setenv("TEST_SCHEMA_STRATEGY", "ensure_tables")
    calls = []
    monkeypatch.setattr(Base.metadata, "create_all", lambda *a, **kw: calls.append(1))
    ensure_tables(_POSTGRES_BIND)
    assert calls == []


def test_postgres_creates_with_ensure_tables_strategy(monkeypatch) -> None:
    monkeypatch.setenv("ENV", "test")
    monkeypatch.setenv("TEST_SCHEMA_STRATEGY", "ensure_tables")
    calls = []
    monkeypatch.setattr(Base.metadata, "create_all", lambda *a, **kw: calls.append(kw))
    ensure_tables(_POSTGRES_BIND)
    assert calls == [{"bind": _POSTGRES_BIND, "checkfirst": True}]
