"""Logging setup shared by the CLI and the TUI."""
import logging
import os
import sys

from .config import LOG_LEVEL_ENV, parse_log_level

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: int = logging.INFO, stream=None) -> None:
    """Configure the root logger once per process entry point.

    Respects LOADOUT_LOG_LEVEL if present.
    """
    level = parse_log_level(os.getenv(LOG_LEVEL_ENV), level)
    handler = logging.StreamHandler(stream=stream or sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root = logging.getLogger()
    root.setLevel(level)
    # Remove existing handlers to avoid duplicates on repeated calls
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
