"""Logging setup shared by the app, the CLI scripts and the connection monitor."""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)-7s [%(name)s] %(message)s"

_configured = False


def configure_logging(level: str = "INFO") -> None:
    """Attach a single stream handler to the package logger (idempotent)."""
    global _configured
    logger = logging.getLogger("jarvis_api")
    logger.setLevel(getattr(logging, (level or "INFO").upper(), logging.INFO))
    if _configured:
        return
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False
    _configured = True
