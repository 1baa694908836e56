"""Logging setup for userdir entry points."""

import logging
import sys
from functools import lru_cache


@lru_cache(maxsize=1)
def configure_logging(level: str = "INFO") -> None:
    """Configure application logging.

    Sets up:
    - Console output with timestamps and module names
    - Configurable log level for userdir modules
    - WARNING level for noisy third-party libraries
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    log_format = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"

    logging.basicConfig(
        level=log_level,
        format=log_format,
        datefmt=date_format,
        stream=sys.stdout,
        force=True,  # Override any existing config
    )

    logging.getLogger("userdir").setLevel(log_level)

    # Quiet down noisy third-party loggers
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
