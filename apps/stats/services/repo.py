"""Repository layer. Tenant-scoped functions take tenant_id first; guard raises if None/empty.

RULE: Repo is the ONLY place allowed to run DB reads/writes (session.execute, get_db).
All tenant-scoped queries MUST use tenant_filters (select_*_for_tenant / tenant_where).

GUARD: Every tenant-scoped function MUST call require_tenant_id(tenant_id) before any DB access.
"""

from collections.abc import Sequence
from datetime import date, datetime
from typing import Any

from pydantic import ValidationError
from sqlalchemy import delete, insert, select
from sqlalchemy.exc import SQLAlchemyError

from apps.stats.db import get_db
from apps.stats.models.browser_stat import BrowserStat
from apps.stats.models.hit import Hit
from apps.stats.models.site import Site
from apps.stats.repositories.tenant_filters import select_browser_stat_for_tenant, tenant_where
from apps.stats.schemas.browser_stat import BrowserStatOut, RawHourlyCount
from apps.stats.services.browser_window import hourly_counts_query
from apps.stats.services.errors import DeleteError, ReadError, TenantRequiredError, WriteError
from apps.stats.services.tenant_guard import require_tenant_id

__all__ = [
    "TenantRequiredError",
    "create_site",
    "fetch_hourly_counts",
    "get_site",
    "insert_hits",
    "list_browser_stats",
    "list_site_ids",
    "replace_browser_stats",
    "set_site_last_stat",
]


# ---------------------------------------------------------------------------
# Sites (checkpoint)
# ---------------------------------------------------------------------------


def create_site(tenant_id: str | None, last_stat: datetime | None = None) -> Site:
    """Insert a site row. Returns the new Site."""
    tenant_id = require_tenant_id(tenant_id)
    with get_db() as session:
        site = Site(id=tenant_id, last_stat=last_stat)
        session.add(site)
        return site


def get_site(tenant_id: str | None) -> Site | None:
    """Return the site for tenant_id, or None if not found."""
    tenant_id = require_tenant_id(tenant_id)
    with get_db() as session:
        return session.get(Site, tenant_id)


def list_site_ids() -> list[str]:
    """All tenant ids, sorted. Not tenant-scoped: used by the cron runner to pick tenants."""
    with get_db() as session:
        return list(session.scalars(select(Site.id).order_by(Site.id)).all())


def set_site_last_stat(tenant_id: str | None, last_stat: datetime) -> None:
    """Advance the stats checkpoint. Called by the scheduler after a successful rollup, never by the rollup."""
    tenant_id = require_tenant_id(tenant_id)
    with get_db() as session:
        site = session.get(Site, tenant_id)
        if site is None:
            raise LookupError(f"site {tenant_id!r} not found")
        site.last_stat = last_stat


# ---------------------------------------------------------------------------
# Hits (raw telemetry)
# ---------------------------------------------------------------------------


def insert_hits(
    tenant_id: str | None,
    records: Sequence[dict[str, Any]],
) -> int:
    """Bulk insert hits. Each dict: browser, created_at. Returns count inserted."""
    tenant_id = require_tenant_id(tenant_id)
    if not records:
        return 0
    with get_db() as session:
        session.execute(
            insert(Hit),
            [{"tenant_id": tenant_id, "browser": r.get("browser") or "", "created_at": r["created_at"]} for r in records],
        )
        return len(records)


def fetch_hourly_counts(
    tenant_id: str | None,
    watermark: date,
    dialect: str,
) -> list[RawHourlyCount]:
    """
    Hits since watermark grouped by (browser, hour bucket), decoded to RawHourlyCount.
    dialect picks the bucketing SQL ('postgresql' or 'sqlite'). Raises ReadError on query/decoding failure.
    """
    tenant_id = require_tenant_id(tenant_id)
    stmt = hourly_counts_query(dialect)
    try:
        with get_db() as session:
            rows = session.execute(stmt, {"tenant_id": tenant_id, "watermark": watermark.isoformat()}).all()
            return [
                RawHourlyCount.model_validate(
                    {"browser": m["browser"] or "", "count": m["count"], "created_at": m["created_at"]}
                )
                for m in (r._mapping for r in rows)
            ]
    except (SQLAlchemyError, ValidationError) as e:
        raise ReadError(tenant_id, watermark, f"fetch data: {e}") from e


# ---------------------------------------------------------------------------
# browser_stats (daily summary)
# ---------------------------------------------------------------------------


def replace_browser_stats(
    tenant_id: str | None,
    watermark: date,
    rows: Sequence[dict[str, Any]],
) -> int:
    """
    Replace the tenant's browser_stats for day >= watermark with rows, in one transaction.
    Each dict: day, browser, version, count, mobile. Returns count inserted.
    Raises DeleteError / WriteError; on either the transaction is rolled back and the old rows stay.
    """
    tenant_id = require_tenant_id(tenant_id)
    stmt = delete(BrowserStat).where(tenant_where(BrowserStat, tenant_id), BrowserStat.day >= watermark)
    error = DeleteError
    try:
        with get_db() as session:
            session.execute(stmt)
            error = WriteError
            if rows:
                session.execute(insert(BrowserStat), [{**r, "tenant_id": tenant_id} for r in rows])
    except SQLAlchemyError as e:
        raise error(tenant_id, watermark, f"{error.stage}: {e}") from e
    return len(rows)


def list_browser_stats(
    tenant_id: str | None,
    date_from: date | None = None,
    date_to: date | None = None,
) -> list[BrowserStatOut]:
    """Summary rows for a tenant, optionally limited to [date_from, date_to], ordered by day, browser, version."""
    tenant_id = require_tenant_id(tenant_id)
    stmt = select_browser_stat_for_tenant(tenant_id)
    if date_from is not None:
        stmt = stmt.where(BrowserStat.day >= date_from)
    if date_to is not None:
        stmt = stmt.where(BrowserStat.day <= date_to)
    stmt = stmt.order_by(BrowserStat.day, BrowserStat.browser, BrowserStat.version)
    with get_db() as session:
        return [BrowserStatOut.model_validate(r) for r in session.scalars(stmt).all()]
