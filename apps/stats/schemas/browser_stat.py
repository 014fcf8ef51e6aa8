"""Pydantic schemas for browser stats: typed decoding of query rows and summary output."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Storage boundary (raw query rows)
# ---------------------------------------------------------------------------


class RawHourlyCount(BaseModel):
    """One row of the hour-bucketed hits query. created_at is truncated to the hour."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    browser: str = Field("", description="Raw User-Agent header")
    count: int = Field(..., ge=0)
    created_at: datetime


# ---------------------------------------------------------------------------
# Output schemas
# ---------------------------------------------------------------------------


class BrowserStatOut(BaseModel):
    """browser_stats row output. JSON-serializable."""

    model_config = ConfigDict(from_attributes=True, extra="forbid")

    tenant_id: str
    day: date
    browser: str
    version: str
    count: int
    mobile: bool


class BrowserStatResult(BaseModel):
    """Summary of one tenant's rollup run."""

    model_config = ConfigDict(extra="forbid")

    tenant_id: str
    watermark: date
    raw_rows: int = Field(..., description="Hour-bucketed rows read from hits")
    groups: int = Field(..., description="Distinct (day, browser, version) groups")
    rows_written: int
