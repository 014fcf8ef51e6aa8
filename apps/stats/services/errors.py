"""Browser stats rollup errors. Each stage failure wraps the storage error via `raise ... from`."""

from datetime import date


class TenantRequiredError(ValueError):
    """Raised when tenant_id is None or empty."""

    pass


class UnsupportedDialectError(ValueError):
    """Raised when no hourly-bucket query exists for the requested SQL dialect."""

    pass


class BrowserStatError(Exception):
    """A tenant's rollup aborted at `stage`. The previous summary rows are left as they were."""

    stage = "rollup"

    def __init__(self, tenant_id: str, watermark: date | None, message: str | None = None):
        self.tenant_id = tenant_id
        self.watermark = watermark
        window = watermark.isoformat() if watermark else "-"
        super().__init__(f"browser_stats tenant={tenant_id} since={window}: {message or self.stage}")


class ReadError(BrowserStatError):
    """Fetching hour-bucketed hit counts failed."""

    stage = "fetch data"


class DeleteError(BrowserStatError):
    """Removing stale browser_stats rows failed."""

    stage = "delete"


class WriteError(BrowserStatError):
    """Bulk insert of the new browser_stats rows failed."""

    stage = "insert"


class RollupCancelled(BrowserStatError):
    """Run aborted before the write transaction started; nothing was written."""

    stage = "cancelled"
