"""Group classified hour-bucketed counts into daily (day, browser, version) totals."""

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import date
from typing import NamedTuple

from apps.stats.schemas.browser_stat import RawHourlyCount
from apps.stats.services.user_agent import ClassifiedBrowser, classify

logger = logging.getLogger(__name__)


class DailyGroupKey(NamedTuple):
    day: date
    family: str
    version: str


@dataclass
class DailyGroupValue:
    """Running total for one group. mobile is fixed by the first row seen for the group."""

    day: date
    family: str
    version: str
    mobile: bool
    count: int = 0


def _processing_order(row: RawHourlyCount) -> tuple:
    # Earliest hour bucket first, then UA string: decides which row sets a group's mobile flag.
    return (row.created_at, row.browser)


def aggregate(
    tenant_id: str,
    raw_counts: Iterable[RawHourlyCount],
    classifier: Callable[[str], ClassifiedBrowser] = classify,
) -> dict[DailyGroupKey, DailyGroupValue]:
    """Classify each row, drop the unclassifiable ones and sum counts per calendar day and canonical browser."""
    grouped: dict[DailyGroupKey, DailyGroupValue] = {}
    discarded = 0
    for row in sorted(raw_counts, key=_processing_order):
        browser = classifier(row.browser)
        if not browser.family:
            discarded += 1
            continue

        day = row.created_at.date()
        key = DailyGroupKey(day, browser.family, browser.version)
        value = grouped.get(key)
        if value is None:
            value = grouped[key] = DailyGroupValue(
                day=day, family=browser.family, version=browser.version, mobile=browser.mobile
            )
        value.count += row.count

    if discarded:
        logger.debug("tenant=%s discarded=%s unclassifiable rows", tenant_id, discarded)
    return grouped

