"""SQLAlchemy declarative base shared by sites, hits and browser_stats."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all models."""

    pass
