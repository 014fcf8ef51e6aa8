"""Cron logging: stdout + file per script.

Handlers are attached to the script logger and to the `apps.stats` logger so the rollup
services log to the same places. CRON_LOG_DIR (default logs/) and CRON_LOG_LEVEL (default INFO).
"""

import logging
import os
from pathlib import Path

SERVICE_LOGGER = "apps.stats"


def get_logger(script_name: str) -> logging.Logger:
    """Return a logger that writes to stdout and <CRON_LOG_DIR>/cron_<script_name>.log."""
    log_dir = Path(os.getenv("CRON_LOG_DIR") or "logs")
    level = logging.getLevelName((os.getenv("CRON_LOG_LEVEL") or "INFO").strip().upper())
    if not isinstance(level, int):
        level = logging.INFO

    logger = logging.getLogger(f"cron.{script_name}")
    logger.setLevel(level)
    if logger.handlers:
        return logger

    log_dir.mkdir(parents=True, exist_ok=True)
    fmt = logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")

    sh = logging.StreamHandler()
    sh.setFormatter(fmt)

    log_file = log_dir / f"cron_{script_name}.log"
    fh = logging.FileHandler(log_file, encoding="utf-8")
    fh.setFormatter(fmt)

    service_logger = logging.getLogger(SERVICE_LOGGER)
    service_logger.setLevel(level)
    for h in (sh, fh):
        logger.addHandler(h)
        service_logger.addHandler(h)

    return logger
