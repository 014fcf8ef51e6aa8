"""Tenant-scoped SQL helpers. All tenant-scoped queries MUST use these.

Provides:
  - tenant_where(model, tenant_id): binary expression for WHERE model.tenant_id == tenant_id
  - select_browser_stat_for_tenant(tenant_id): SQLAlchemy Select with tenant filter applied
"""

from sqlalchemy import BinaryExpression, Select, select

from apps.stats.models.browser_stat import BrowserStat


def tenant_where(model: type, tenant_id: str) -> BinaryExpression[bool]:
    """Return WHERE clause: model.tenant_id == tenant_id. Use for filters and deletes."""
    col = getattr(model, "tenant_id", None)
    if col is None:
        raise ValueError(f"Model {model.__name__} has no tenant_id column")
    return col == tenant_id


def select_browser_stat_for_tenant(tenant_id: str) -> Select[tuple[BrowserStat]]:
    """Select from browser_stats with tenant filter. Add .where() for further filters."""
    return select(BrowserStat).where(tenant_where(BrowserStat, tenant_id))
