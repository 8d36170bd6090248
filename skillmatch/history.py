"""Load a user's application history from JSON or CSV exports."""
from __future__ import annotations

import csv
import fcntl
import hashlib
import json
import math
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from skillmatch.log import get_logger
from skillmatch.models import ApplicationStatus, JobApplication
from skillmatch.sources.base import job_listing_from_dict

log = get_logger(__name__)

CSV_HEADERS: list[str] = [
    "id", "job_id", "title", "company", "status",
    "applied_date", "updated_at", "match_score", "resume_snapshot",
]


def _lock_shared(f) -> None:
    """Advisory read lock (Unix fcntl)."""
    try:
        fcntl.flock(f.fileno(), fcntl.LOCK_SH)
    except (OSError, AttributeError):
        pass


def _unlock(f) -> None:
    try:
        fcntl.flock(f.fileno(), fcntl.LOCK_UN)
    except (OSError, AttributeError):
        pass


def parse_timestamp(value: Any) -> datetime | None:
    """ISO-8601 string or datetime -> aware UTC datetime; None if unusable."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        ts = value
    else:
        text = str(value).strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            ts = datetime.fromisoformat(text)
        except ValueError:
            log.debug("Ignoring unparseable timestamp %r", value)
            return None
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc)


def _get(data: dict[str, Any], *keys: str) -> Any:
    for key in keys:
        value = data.get(key)
        if value not in (None, ""):
            return value
    return None


def _score(value: Any) -> float | None:
    if value in (None, ""):
        return None
    try:
        score = float(value)
    except (TypeError, ValueError):
        return None
    return score if math.isfinite(score) else None


def application_from_dict(data: dict[str, Any]) -> JobApplication:
    """Build an application from a camelCase or snake_case record.

    Raises ValueError when the status is not a known application status.
    """
    status = ApplicationStatus.parse(_get(data, "status") or "")

    job_data = data.get("job")
    job = job_listing_from_dict(job_data) if isinstance(job_data, dict) else None

    app_id = _get(data, "id")
    if app_id is None:
        seed = json.dumps(data, sort_keys=True, default=str)
        app_id = "app_" + hashlib.sha256(seed.encode()).hexdigest()[:12]

    return JobApplication(
        id=str(app_id),
        status=status,
        job_id=str(_get(data, "job_id", "jobId") or (job.id if job else "")),
        user_id=str(_get(data, "user_id", "userId") or ""),
        applied_date=parse_timestamp(_get(data, "applied_date", "appliedDate")),
        applied_at=parse_timestamp(_get(data, "applied_at", "appliedAt")),
        updated_at=parse_timestamp(_get(data, "updated_at", "updatedAt", "last_updated")),
        resume_snapshot=str(_get(data, "resume_snapshot", "resumeSnapshot") or ""),
        job=job,
        company=str(_get(data, "company") or ""),
        job_title=str(_get(data, "job_title", "jobTitle", "title") or ""),
        match_score=_score(_get(data, "match_score", "matchScore")),
        notes=str(_get(data, "notes") or ""),
    )


def _read_records(path: Path) -> list[dict[str, Any]]:
    suffix = path.suffix.lower()
    if suffix == ".json":
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if isinstance(data, dict):
            data = data.get("applications", [])
        if not isinstance(data, list):
            raise ValueError(f"{path.name}: expected a list of applications")
        return data
    if suffix == ".csv":
        with open(path, "r", newline="", encoding="utf-8") as f:
            _lock_shared(f)
            rows = list(csv.DictReader(f))
            _unlock(f)
        return rows
    raise ValueError(f"Unsupported history format: {suffix}")


def load_applications(path: Path) -> list[JobApplication]:
    """Read every valid application in *path*; bad records are logged and skipped."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"History file not found: {path}")

    applications: list[JobApplication] = []
    skipped = 0
    for i, record in enumerate(_read_records(path)):
        if not isinstance(record, dict):
            log.warning("Skipping record %d in %s: not a mapping", i, path.name)
            skipped += 1
            continue
        try:
            applications.append(application_from_dict(record))
        except ValueError as exc:
            log.warning("Skipping record %d in %s: %s", i, path.name, exc)
            skipped += 1

    log.info("Loaded %d applications from %s (%d skipped)", len(applications), path.name, skipped)
    return applications
