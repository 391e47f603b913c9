"""
Logger factory for the invoice manager.

Modules call logger(__file__) at import time and keep the result in a
module-level LOG. Each logger gets a single stderr handler, so repeated
calls or re-imports never duplicate output. The threshold comes from the
LOG_LEVEL environment variable and falls back to INFO for unknown names.
"""

import logging
import os
from pathlib import Path

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

_FORMATTER = logging.Formatter(
    "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)


def logger_name(name: str) -> str:
    """Module stem for a source path such as __file__; other names pass through."""
    if "/" in name or "\\" in name:
        return Path(name).stem
    return name


def level() -> int:
    """Numeric level for LOG_LEVEL, INFO when it names no level."""
    value = logging.getLevelName(LOG_LEVEL)
    return value if isinstance(value, int) else logging.INFO


def logger(name: str) -> logging.Logger:
    """
    Logger for a module, created with the shared format on first use.

    Args:
        name: Dotted logger name or a __file__ path.
    """
    log = logging.getLogger(logger_name(name))
    if not log.handlers:
        log.setLevel(level())
        handler = logging.StreamHandler()
        handler.setFormatter(_FORMATTER)
        log.addHandler(handler)
    return log
