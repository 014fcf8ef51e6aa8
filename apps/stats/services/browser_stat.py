"""Browser stats rollup for one site: hits since the checkpoint -> daily browser_stats rows.

    watermark = select_window(site)
    raw       = repo.fetch_hourly_counts(...)      ReadError
    groups    = aggregate(...)                     (pure)
    replace(...)                                   DeleteError / WriteError

The site's last_stat is only read here; advancing it is the caller's job.
Concurrent runs for the same site must be serialized by the caller.
"""

import logging
import threading

from apps.stats.db import dialect_name
from apps.stats.models.site import Site
from apps.stats.schemas.browser_stat import BrowserStatResult
from apps.stats.services import repo
from apps.stats.services.browser_aggregate import aggregate
from apps.stats.services.browser_rollup import replace
from apps.stats.services.browser_window import select_window
from apps.stats.services.errors import RollupCancelled
from apps.stats.services.tenant_guard import require_tenant_id

logger = logging.getLogger(__name__)


def _check_cancel(cancel: threading.Event | None, tenant_id: str, watermark) -> None:
    if cancel is not None and cancel.is_set():
        raise RollupCancelled(tenant_id, watermark, "cancelled before delete")


def update_browser_stats(
    site: Site,
    dialect: str | None = None,
    cancel: threading.Event | None = None,
) -> BrowserStatResult:
    """
    Recompute browser_stats for site from its watermark onwards.
    dialect: SQL dialect for hour bucketing; defaults to the engine's.
    cancel: if set before the write transaction starts, raises RollupCancelled and writes nothing.
    """
    tenant_id = require_tenant_id(site.id)
    dialect = dialect or dialect_name()
    watermark = select_window(site)

    _check_cancel(cancel, tenant_id, watermark)
    raw = repo.fetch_hourly_counts(tenant_id, watermark, dialect)
    groups = aggregate(tenant_id, raw)
    logger.info(
        "tenant=%s since=%s raw_rows=%s groups=%s",
        tenant_id,
        watermark.isoformat(),
        len(raw),
        len(groups),
    )

    _check_cancel(cancel, tenant_id, watermark)

    written = replace(tenant_id, watermark, groups)
    return BrowserStatResult(
        tenant_id=tenant_id,
        watermark=watermark,
        raw_rows=len(raw),
        groups=len(groups),
        rows_written=written,
    )
