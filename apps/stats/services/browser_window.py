"""Recompute window for browser stats: the watermark date and the hour-bucketed hits query.

Both query formulations return rows (browser, count, created_at) where created_at is the
hour bucket "YYYY-MM-DD HH:00:00"; for identical hits they yield identical rows.
  - postgresql: string truncation of the timestamp cast to varchar, cast back to timestamp.
  - sqlite: strftime bucketing.
"""

from datetime import date, datetime
from typing import Protocol

from sqlalchemy import TextClause, text

from apps.stats.services.errors import UnsupportedDialectError

EPOCH = date(1970, 1, 1)

POSTGRESQL = "postgresql"
SQLITE = "sqlite"

# "\:" stops text() from reading ":00" as a bind parameter.
_HOURLY_COUNTS_SQL = {
    POSTGRESQL: r"""
        SELECT
            browser,
            count(browser) AS count,
            cast(substr(cast(created_at AS varchar), 1, 13) || '\:00:00' AS timestamp) AS created_at
        FROM hits
        WHERE tenant_id = :tenant_id AND created_at >= :watermark
        GROUP BY browser, substr(cast(created_at AS varchar), 1, 13)
        ORDER BY count DESC
    """,
    SQLITE: r"""
        SELECT
            browser,
            count(browser) AS count,
            strftime('%Y-%m-%d %H:00:00', created_at) AS created_at
        FROM hits
        WHERE tenant_id = :tenant_id AND created_at >= :watermark
        GROUP BY browser, strftime('%Y-%m-%d %H', created_at)
        ORDER BY count DESC
    """,
}

SUPPORTED_DIALECTS = tuple(_HOURLY_COUNTS_SQL)


class HasLastStat(Protocol):
    last_stat: datetime | None


def select_window(site: HasLastStat) -> date:
    """Watermark: the date of the site's last checkpoint (time of day dropped), or 1970-01-01."""
    if site.last_stat is None:
        return EPOCH
    if isinstance(site.last_stat, datetime):
        return site.last_stat.date()
    return site.last_stat


def hourly_counts_query(dialect: str) -> TextClause:
    """Hits grouped by (browser, hour) for one tenant since :watermark. Bind :tenant_id and :watermark (ISO date)."""
    sql = _HOURLY_COUNTS_SQL.get((dialect or "").strip().lower())
    if sql is None:
        raise UnsupportedDialectError(f"no hourly bucket query for dialect {dialect!r}; expected one of {SUPPORTED_DIALECTS}")
    return text(sql)
