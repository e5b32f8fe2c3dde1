"""Loguru helpers for CLI commands.

stdout carries protocol frames, so every sink writes to stderr or a file.
"""

from __future__ import annotations

import sys
from pathlib import Path

from loguru import logger

from toastmcp.utils.helpers import get_data_path

_SINK_IDS: dict[str, int] = {}

STDERR_FORMAT = "<dim>{time:HH:mm:ss.SSS}</dim> | <level>{level: <8}</level> | <level>{message}</level>"


def get_log_dir() -> Path:
    return get_data_path() / "logs"


def configure_stderr_logging(level: str = "INFO") -> None:
    """Replace loguru's default sink with a stderr sink at ``level``."""
    logger.remove()
    logger.add(sys.stderr, level=level.upper(), format=STDERR_FORMAT)
    logger.enable("toastmcp")


def ensure_rotating_log_file(name: str, level: str = "INFO") -> Path:
    """Ensure a rotating log sink for the given command name."""
    log_dir = get_log_dir()
    log_path = log_dir / f"{name}.log"
    if name in _SINK_IDS:
        return log_path
    log_dir.mkdir(parents=True, exist_ok=True)
    sink_id = logger.add(
        str(log_path),
        level=level.upper(),
        rotation="10 MB",
        retention="14 days",
        enqueue=True,
        encoding="utf-8",
        backtrace=False,
        diagnose=False,
    )
    _SINK_IDS[name] = sink_id
    return log_path
