"""Centralized logger configuration.

Usage:
    from records.logger import get_logger
    logger = get_logger(__name__)

Level is read from RECORDS_LOG_LEVEL (default INFO).
"""
from __future__ import annotations

import logging
import os

DEFAULT_LEVEL = os.getenv("RECORDS_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


# PUBLIC_INTERFACE
def setup_logging(level: str = DEFAULT_LEVEL) -> None:
    """Configure the root logger once for entry points."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
    )


# PUBLIC_INTERFACE
def get_logger(name: str) -> logging.Logger:
    """Return a named logger, configuring the root logger on first use."""
    if not logging.getLogger().handlers:
        setup_logging()
    return logging.getLogger(name)
