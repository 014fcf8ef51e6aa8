"""Write aggregated browser groups to browser_stats with delete-then-bulk-insert.

Deleting the whole window and inserting fresh rows is faster than per-row updates and
also removes groups that no longer exist (e.g. every hit got reclassified away), which an
upsert cannot do. Delete and insert share one transaction, so a failure in either leaves
the previous rows in place; rerunning from the same watermark is always safe.
"""

import logging
from collections.abc import Mapping
from datetime import date
from typing import Any

from apps.stats.services import repo
from apps.stats.services.browser_aggregate import DailyGroupKey, DailyGroupValue

logger = logging.getLogger(__name__)


def to_rows(groups: Mapping[DailyGroupKey, DailyGroupValue]) -> list[dict[str, Any]]:
    """One browser_stats insert dict per group."""
    return [
        {"day": v.day, "browser": v.family, "version": v.version, "count": v.count, "mobile": v.mobile}
        for v in groups.values()
    ]


def replace(tenant_id: str, watermark: date, groups: Mapping[DailyGroupKey, DailyGroupValue]) -> int:
    """Replace tenant's browser_stats for day >= watermark with groups. Raises DeleteError / WriteError."""
    rows = to_rows(groups)
    n = repo.replace_browser_stats(tenant_id, watermark, rows)
    logger.info("tenant=%s since=%s browser_stats replaced rows=%s", tenant_id, watermark.isoformat(), n)
    return n
