"""Load settings and env configuration."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from skillmatch.log import get_logger

log = get_logger(__name__)

load_dotenv()

PROJECT_ROOT: Path = Path(__file__).resolve().parent.parent
PACKAGE_DATA_DIR: Path = Path(__file__).resolve().parent / "data"
CONFIG_DIR: Path = PROJECT_ROOT / "config"
SETTINGS_PATH: Path = CONFIG_DIR / "settings.yaml"
REPORTS_DIR: Path = PROJECT_ROOT / "reports"
DATA_DIR: Path = PROJECT_ROOT / "data"

DEFAULT_SKILLS_PATH: Path = PACKAGE_DATA_DIR / "skills.yaml"
SAMPLE_JOBS_PATH: Path = PACKAGE_DATA_DIR / "jobs.yaml"

DEFAULT_SETTINGS: dict[str, Any] = {
    "skills_path": None,
    "catalog_path": None,
    "page_limit": 10,
    "top_skills_in_report": 10,
}

_ENV_OVERRIDES: dict[str, str] = {
    "SKILLMATCH_SKILLS_PATH": "skills_path",
    "SKILLMATCH_CATALOG_PATH": "catalog_path",
    "SKILLMATCH_PAGE_LIMIT": "page_limit",
}


def get_env(key: str, default: str = "") -> str:
    return os.environ.get(key, default).strip()


def load_settings(path: Path | None = None) -> dict[str, Any]:
    """Defaults, overlaid by the settings YAML (if any), overlaid by env vars."""
    path = path or SETTINGS_PATH
    settings: dict[str, Any] = dict(DEFAULT_SETTINGS)

    if path.exists():
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"{path.name}: expected a mapping at top level")

        # Older settings files used a flat "limit" key
        if "limit" in data and "page_limit" not in data:
            data["page_limit"] = data.pop("limit")

        settings.update(data)
        log.debug("Loaded settings from %s", path)

    for env_key, setting in _ENV_OVERRIDES.items():
        value = get_env(env_key)
        if value:
            settings[setting] = value

    settings["page_limit"] = _positive_int(settings.get("page_limit"), "page_limit")
    settings["top_skills_in_report"] = _positive_int(
        settings.get("top_skills_in_report"), "top_skills_in_report",
    )
    return settings


def _positive_int(value: Any, name: str) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValueError(f"Setting {name!r} must be an integer, got {value!r}") from None
    if number < 1:
        raise ValueError(f"Setting {name!r} must be >= 1, got {number}")
    return number


def get_skills_path(settings: dict[str, Any]) -> Path:
    """Configured dictionary file, or the bundled default."""
    configured = settings.get("skills_path")
    return Path(configured).expanduser() if configured else DEFAULT_SKILLS_PATH


def ensure_dirs() -> None:
    for d in (REPORTS_DIR, DATA_DIR):
        d.mkdir(parents=True, exist_ok=True)
