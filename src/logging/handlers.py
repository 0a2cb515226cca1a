# src/logging/handlers.py - v2
"""Rotating file handlers for log files.

Rotation is either size based ("10MB") or time based ("daily", "hourly").
"""

from __future__ import annotations

import logging
import re
from logging.handlers import RotatingFileHandler, TimedRotatingFileHandler
from pathlib import Path

_INTERVALS = {"hourly": "H", "daily": "midnight", "weekly": "W0"}


def _parse_size(size_str: str) -> int:
    """Parse size string like '10MB' into bytes.

    Supported suffixes: KB, MB, GB (case-insensitive).
    """
    match = re.match(r"^(\d+)\s*(KB|MB|GB)$", size_str.strip(), re.IGNORECASE)
    if not match:
        raise ValueError(
            f"Invalid rotation: {size_str!r}. Use a size like '10MB' "
            f"or one of {', '.join(_INTERVALS)}."
        )
    multipliers = {"KB": 1024, "MB": 1024**2, "GB": 1024**3}
    return int(match.group(1)) * multipliers[match.group(2).upper()]


def create_rotating_handler(
    log_file: str,
    rotation: str = "10MB",
    retention: int = 30,
) -> logging.Handler:
    """Create a size- or time-rotating file handler.

    Args:
        log_file: Path to log file (parent directories are created).
        rotation: "10MB"-style size, or "hourly" / "daily" / "weekly".
        retention: Number of backup files to keep.
    """
    path = Path(log_file).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)

    interval = _INTERVALS.get(rotation.strip().lower())
    if interval is not None:
        return TimedRotatingFileHandler(
            filename=str(path),
            when=interval,
            backupCount=retention,
            encoding="utf-8",
        )

    return RotatingFileHandler(
        filename=str(path),
        maxBytes=_parse_size(rotation),
        backupCount=retention,
        encoding="utf-8",
    )
