"""Tenant-scoped query choke point. All repo methods must use require_tenant_id and tenant_where."""

from apps.stats.repositories.tenant_filters import tenant_where
from apps.stats.services.errors import TenantRequiredError


def require_tenant_id(tenant_id: str | None) -> str:
    """
    Validate tenant_id (the site id); return stripped value. Raises TenantRequiredError if missing/empty.
    Call at start of every tenant-scoped repo method, before any DB access.
    """
    if not tenant_id or not str(tenant_id).strip():
        raise TenantRequiredError("tenant_id is required and must be non-empty")
    return str(tenant_id).strip()


__all__ = ["TenantRequiredError", "require_tenant_id", "tenant_where"]
