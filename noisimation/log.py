"""Logging setup for the noisimation command line.

Log records go to stderr so they never interleave with frames on stdout.

Usage:
    from noisimation.log import setup_logging

    setup_logging()                          # INFO to stderr
    setup_logging(debug=True)                # per-frame DEBUG records
    setup_logging(log_file="noisimation.log")
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

MAX_BYTES = 5 * 1024 * 1024  # 5 MB
BACKUP_COUNT = 3


def setup_logging(
    level: int = logging.INFO,
    log_file: str | None = None,
    fmt: str = DEFAULT_FORMAT,
    *,
    debug: bool = False,
) -> None:
    """Configure the root logger. Call once at the start of an entry point."""
    if debug:
        level = logging.DEBUG

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            RotatingFileHandler(
                log_file,
                maxBytes=MAX_BYTES,
                backupCount=BACKUP_COUNT,
            )
        )
    logging.basicConfig(level=level, format=fmt, handlers=handlers, force=True)

    if log_file:
        logging.getLogger().info("Logging to %s", log_file)
