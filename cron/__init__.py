"""Cron package: shared helpers for scheduled jobs."""

from cron import config
from cron.logging import get_logger

__all__ = ["config", "get_logger"]
