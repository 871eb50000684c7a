"""Logging helpers."""

from __future__ import annotations

import logging
from typing import Optional, Union

from .config import get_log_level

LOG_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"


def configure_logging(level: Optional[Union[int, str]] = None) -> int:
    """Configure root logging, defaulting to ``AIRSENSE_LOG_LEVEL``.

    Returns the numeric level that was applied.
    """
    if level is None:
        level = get_log_level()
    elif isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise RuntimeError(f"Unknown log level: {level}")
        level = resolved
    logging.basicConfig(format=LOG_FORMAT, level=level, force=True)
    return level
