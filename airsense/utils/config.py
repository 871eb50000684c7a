"""Configuration helpers for data locations and defaults."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import dotenv_values

DEFAULT_DATA_ROOT = "airsense_data"
DEFAULT_LOG_LEVEL = "INFO"


def _setting(name: str, env_path: Optional[Path] = None) -> Optional[str]:
    """Read a setting from the environment, falling back to a .env file."""
    value = os.environ.get(name)
    if value:
        return value

    env_path = env_path or Path(".env")
    if env_path.exists():
        return dotenv_values(str(env_path)).get(name)
    return None


def get_data_root(env_path: Path | None = None) -> Path:
    """Return the directory holding the station catalog CSV files."""
    root = Path(_setting("AIRSENSE_DATA_ROOT", env_path) or DEFAULT_DATA_ROOT)
    root.mkdir(parents=True, exist_ok=True)
    return root


def get_log_level(env_path: Path | None = None) -> int:
    """Return the configured logging level as a ``logging`` constant."""
    name = (_setting("AIRSENSE_LOG_LEVEL", env_path) or DEFAULT_LOG_LEVEL).upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        raise RuntimeError(f"Unknown log level in AIRSENSE_LOG_LEVEL: {name}")
    return level
