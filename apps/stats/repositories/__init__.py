"""Repository layer: tenant-scoped queries and helpers."""

from apps.stats.repositories.tenant_filters import (
    select_browser_stat_for_tenant,
    tenant_where,
)

__all__ = [
    "tenant_where",
    "select_browser_stat_for_tenant",
]
