"""hits model. Raw per-request telemetry written by the ingestion path."""

from datetime import datetime

from sqlalchemy import BigInteger, DateTime, Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from apps.stats.models.base import Base


class Hit(Base):
    """One tracked request. browser holds the raw User-Agent header; created_at is naive UTC."""

    __tablename__ = "hits"
    __table_args__ = (Index("ix_hits_tenant_created", "tenant_id", "created_at"),)

    id: Mapped[int] = mapped_column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True)
    tenant_id: Mapped[str] = mapped_column(Text, nullable=False)
    browser: Mapped[str] = mapped_column(Text, nullable=False, default="")
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
