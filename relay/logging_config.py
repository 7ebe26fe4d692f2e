"""Logging configuration for the relay and the client library."""

from __future__ import annotations

import logging
from typing import Optional

from msgclient.config import get_settings

logger = logging.getLogger("relay.server")

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Transport-level loggers that echo every request at INFO.
QUIET_LOGGERS = ("httpx", "httpcore")


def configure_logging(level: Optional[str] = None) -> None:
    """Install the root handler once and set the relay and client log levels.

    `level` defaults to the LOG_LEVEL setting. The msgclient loggers follow
    the same level so signing and reconciliation debug output can be switched
    on together with the relay's.
    """
    name = (level or get_settings().log_level or "INFO").upper()
    numeric_level = getattr(logging, name, logging.INFO)

    if not logging.getLogger().handlers:
        logging.basicConfig(level=numeric_level, format=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    for package in ("relay", "msgclient"):
        logging.getLogger(package).setLevel(numeric_level)
    for noisy in QUIET_LOGGERS:
        logging.getLogger(noisy).setLevel(logging.WARNING)
