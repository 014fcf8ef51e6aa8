"""browser_stats model. Tenant-scoped daily counts per browser family and version."""

from datetime import date

from sqlalchemy import BigInteger, Boolean, Date, Index, Integer, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from apps.stats.models.base import Base


class BrowserStat(Base):
    """Daily rollup row. One row per (tenant_id, day, browser, version); kept unique by delete-then-insert."""

    __tablename__ = "browser_stats"
    __table_args__ = (Index("ix_browser_stats_tenant_day", "tenant_id", "day"),)

    id: Mapped[int] = mapped_column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True)
    tenant_id: Mapped[str] = mapped_column(Text, nullable=False)
    day: Mapped[date] = mapped_column(Date, nullable=False)
    browser: Mapped[str] = mapped_column(Text, nullable=False)
    version: Mapped[str] = mapped_column(Text, nullable=False)
    count: Mapped[int] = mapped_column(Integer, nullable=False, server_default=text("0"))
    mobile: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default=text("false"))
