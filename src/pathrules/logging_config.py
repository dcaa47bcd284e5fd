"""Logging configuration for pathrules.

The engine only emits DEBUG records; nothing is configured until a caller
(normally the command line) asks for it with :func:`setup_logging`.
"""
from __future__ import annotations

import logging
import sys

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def parse_level(value: str | int) -> int:
    """Resolve a level name such as ``"debug"`` or a numeric level."""
    if isinstance(value, int):
        return value
    name = value.upper()
    if name not in LEVELS:
        raise ValueError(f"invalid log level: {value}")
    return getattr(logging, name)


def setup_logging(level: str | int = logging.WARNING, format_string: str | None = None) -> None:
    """Send log records at ``level`` and above to stderr.

    Args:
        level: Logging level, as a number or a level name.
        format_string: Optional custom format for log messages.
    """
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(format_string or DEFAULT_FORMAT))
    logging.basicConfig(level=parse_level(level), handlers=[handler], force=True)


def get_logger(name: str) -> logging.Logger:
    """Logger for a module (``name`` is normally ``__name__``)."""
    return logging.getLogger(name)
