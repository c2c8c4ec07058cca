"""Console logging for the valuation CLI.

The console shows INFO and above by default: load counts, cycle warnings and
malformed-feed errors. `--verbose` or ``PORTFOLIO_VALUATION_LOG_LEVEL=DEBUG``
adds the per-investment traces.
"""
from __future__ import annotations

import logging
import os
from typing import Optional, Union

LOG_LEVEL_ENV = "PORTFOLIO_VALUATION_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_NAMED_LEVELS = {
    "CRITICAL": logging.CRITICAL,
    "ERROR": logging.ERROR,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
}

Level = Union[str, int]


def resolve_level(value: Optional[Level], default: int = logging.INFO) -> int:
    """Map a level name ("debug"), a numeric string ("10") or an int to a level.

    None, blank and unrecognised values give `default`.
    """
    if isinstance(value, int):
        return value
    text = (value or "").strip().upper()
    if text.isdigit():
        return int(text)
    return _NAMED_LEVELS.get(text, default)


def configure_logging(level: Optional[Level] = None, *, force: bool = False) -> int:
    """Send log records to stderr at `level` (or the environment's level) and return it.

    An already configured root logger keeps its handlers and only has its
    level changed, unless `force` replaces them.
    """
    resolved = resolve_level(level if level is not None else os.getenv(LOG_LEVEL_ENV))
    root = logging.getLogger()
    if root.handlers and not force:
        root.setLevel(resolved)
    else:
        logging.basicConfig(level=resolved, format=LOG_FORMAT, force=force)
    return resolved


__all__ = ["configure_logging", "resolve_level", "LOG_FORMAT", "LOG_LEVEL_ENV"]
