#!/usr/bin/env python3
"""Browser stats rollup: rebuild browser_stats for each site since its last checkpoint.

- Tenants: TENANTS env, or every row in sites when empty.
- Per tenant: update_browser_stats, then advance sites.last_stat to the run start
  (ADVANCE_CHECKPOINT=false leaves the checkpoint to an outside scheduler).
- A failing tenant is logged and skipped; its checkpoint is not advanced, so the next
  run recomputes the same window. Exit code 1 if any tenant failed.
- SIGTERM/SIGINT stop the run before the next tenant's delete step.

Run from the project root: python -m cron.browser_stats
"""

import signal
import sys
import threading
from datetime import datetime, timezone
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from cron.config import config
from cron.logging import get_logger

logger = get_logger("browser_stats")


def _now() -> datetime:
    """Naive UTC, matching hits.created_at and sites.last_stat."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _tenants() -> list[str]:
    from apps.stats.services.repo import list_site_ids

    return config.TENANTS or list_site_ids()


def _run_tenant(tenant_id: str, cancel: threading.Event) -> bool:
    """Roll up one tenant. Returns True on success."""
    from apps.stats.services.browser_stat import update_browser_stats
    from apps.stats.services.errors import BrowserStatError
    from apps.stats.services.repo import get_site, set_site_last_stat

    site = get_site(tenant_id)
    if site is None:
        logger.warning("tenant=%s no site row, skipping", tenant_id)
        return False

    started = _now()
    try:
        result = update_browser_stats(site, dialect=config.DB_DIALECT, cancel=cancel)
    except BrowserStatError as e:
        logger.error("tenant=%s stage=%s error: %s", tenant_id, e.stage, e)
        return False

    if config.ADVANCE_CHECKPOINT:
        set_site_last_stat(tenant_id, started)
    logger.info(
        "tenant=%s since=%s raw_rows=%s groups=%s written=%s",
        tenant_id,
        result.watermark.isoformat(),
        result.raw_rows,
        result.groups,
        result.rows_written,
    )
    return True


def main(cancel: threading.Event | None = None) -> int:
    cancel = cancel or threading.Event()
    tenants = _tenants()
    if not tenants:
        logger.warning("no tenants, nothing to run")
        return 0

    logger.info("browser_stats start tenants=%s dialect=%s", tenants, config.DB_DIALECT)
    any_failed = False
    for tenant_id in tenants:
        if cancel.is_set():
            logger.warning("cancelled, %s tenant(s) not processed", len(tenants) - tenants.index(tenant_id))
            return 1
        try:
            ok = _run_tenant(tenant_id, cancel)
        except Exception as e:
            logger.exception("tenant=%s error: %s", tenant_id, e)
            ok = False
        if not ok:
            any_failed = True

    logger.info("browser_stats done")
    return 1 if any_failed else 0


if __name__ == "__main__":
    stop = threading.Event()
    signal.signal(signal.SIGTERM, lambda *_: stop.set())
    signal.signal(signal.SIGINT, lambda *_: stop.set())
    sys.exit(main(stop))
