"""SQLAlchemy models. hits and browser_stats carry tenant_id; queries MUST filter by tenant_id."""

from apps.stats.models.base import Base
from apps.stats.models.browser_stat import BrowserStat
from apps.stats.models.hit import Hit
from apps.stats.models.site import Site

__all__ = [
    "Base",
    "BrowserStat",
    "Hit",
    "Site",
]
