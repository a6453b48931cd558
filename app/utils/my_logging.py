# app/utils/my_logging.py
"""Logging configuration"""
import logging
import sys
from typing import Optional

from app.config.settings import get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Libraries that flood the output at INFO
NOISY_LOGGERS = (
    "sqlalchemy.engine",
    "sqlalchemy.pool",
    "sqlalchemy.orm",
    "alembic",
    "redis",
    "httpx",
    "uvicorn.access",
)

# Booking audit trail stays visible even when the app runs at WARNING
BOOKING_LOGGERS = (
    "app.services.scheduler.booking_committer",
    "app.services.appointment.appointment_service",
)


def setup_logging(verbose: Optional[bool] = None):
    """Configure application logging.

    verbose=None follows LOG_LEVEL; False drops the root to WARNING and
    silences third-party loggers entirely.
    """
    settings = get_settings()

    if verbose is False:
        level = logging.WARNING
    else:
        level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    noisy_level = logging.ERROR if verbose is False else logging.WARNING
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(noisy_level)

    for name in BOOKING_LOGGERS:
        logging.getLogger(name).setLevel(min(level, logging.INFO))
