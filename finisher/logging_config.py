"""
logging_config.py

Responsibility: Diagnostic logging for the CLI.

Reports are written to stdout by the CLI; log records go to stderr so they never
mix with report text.
"""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(*, verbose: bool = False) -> logging.Logger:
    """
    Configure the `finisher` logger with a single stderr handler.

    Safe to call more than once; existing handlers are replaced.
    """
    logger = logging.getLogger("finisher")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False
    return logger


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
