"""Logging configuration."""

import logging
import sys

from papertrade.config.settings import get_settings

LOG_FORMAT = "%(asctime)s %(levelname)-7s [%(threadName)s] %(name)s: %(message)s"

# Chatty third-party loggers capped at WARNING
_QUIET_LOGGERS = ("sqlalchemy.engine", "urllib3", "yfinance", "peewee")


def setup_logging() -> None:
    """Configure root logging from settings.log_level."""
    settings = get_settings()

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    logging.getLogger("papertrade").setLevel(settings.log_level.upper())
