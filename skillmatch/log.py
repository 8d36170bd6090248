"""Logging setup shared by every skillmatch module.

The first ``get_logger`` call installs a stdout handler at ``LOG_LEVEL`` and,
unless ``SKILLMATCH_LOG_FILE`` is off, a DEBUG file under ``logs/`` (or
``SKILLMATCH_LOG_DIR``) named after the day.
"""
from __future__ import annotations

import logging
import os
import sys
from datetime import datetime
from pathlib import Path

_DEFAULT_LOG_DIR = Path(__file__).resolve().parent.parent / "logs"
_FORMATTER = logging.Formatter(
    "%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
_OFF = ("0", "false", "no", "off")
_configured = False


def get_logger(name: str) -> logging.Logger:
    global _configured
    if not _configured:
        _configure()
        _configured = True
    return logging.getLogger(name)


def log_file_path(day: datetime | None = None) -> Path | None:
    """Where today's log file goes, or None when file logging is off."""
    if os.environ.get("SKILLMATCH_LOG_FILE", "1").strip().lower() in _OFF:
        return None
    override = os.environ.get("SKILLMATCH_LOG_DIR", "").strip()
    log_dir = Path(override) if override else _DEFAULT_LOG_DIR
    return log_dir / f"skillmatch_{(day or datetime.now()):%Y-%m-%d}.log"


def file_handler(path: Path) -> logging.Handler | None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(path, encoding="utf-8")
    except OSError:
        return None
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(_FORMATTER)
    return handler


def _configure() -> None:
    level = getattr(logging, os.environ.get("LOG_LEVEL", "INFO").upper(), logging.INFO)
    root = logging.getLogger()
    root.setLevel(level)

    # Host already configured logging (pytest, an embedding app)
    if root.handlers:
        return

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(level)
    console.setFormatter(_FORMATTER)
    root.addHandler(console)

    path = log_file_path()
    handler = file_handler(path) if path else None
    if handler is not None:
        root.addHandler(handler)
    elif path:
        root.debug("File logging disabled: cannot write %s", path)
