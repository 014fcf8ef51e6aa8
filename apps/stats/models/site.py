"""sites model. Tenant record plus the stats checkpoint."""

from datetime import datetime

from sqlalchemy import DateTime, Text
from sqlalchemy.orm import Mapped, mapped_column

from apps.stats.models.base import Base


class Site(Base):
    """A tracked site. id is the tenant_id used by hits and browser_stats.

    last_stat is advanced by the scheduler after a successful rollup; the rollup itself only reads it.
    """

    __tablename__ = "sites"

    id: Mapped[str] = mapped_column(Text, primary_key=True)
    last_stat: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
