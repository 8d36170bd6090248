from __future__ import annotations

import hashlib
import math
from abc import ABC, abstractmethod
from typing import Any

from skillmatch.models import JobListing


class JobCatalogBase(ABC):
    @abstractmethod
    def listings(self) -> list[JobListing]:
        pass


def _first(data: dict[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        if data.get(key) is not None:
            return data[key]
    return default


def _str_tuple(value: Any) -> tuple[str, ...]:
    if not value:
        return ()
    if isinstance(value, str):
        return tuple(v.strip() for v in value.split(",") if v.strip())
    return tuple(str(v) for v in value)


def _score(value: Any) -> int:
    try:
        score = float(value)
    except (TypeError, ValueError):
        return 0
    return int(round(score)) if math.isfinite(score) else 0


def job_listing_from_dict(data: dict[str, Any]) -> JobListing:
    """Build a listing from a camelCase or snake_case mapping."""
    title = str(_first(data, "title", default=""))
    company = str(_first(data, "company", "company_name", default=""))
    raw_id = _first(data, "id", "job_id", "jobId")
    if raw_id is None:
        raw_id = hashlib.sha256(f"{title}{company}".encode()).hexdigest()[:12]
    return JobListing(
        id=str(raw_id),
        title=title,
        company=company,
        location=str(_first(data, "location", default="")),
        type=str(_first(data, "type", "job_type", "jobType", default="")),
        salary=str(_first(data, "salary", default="")),
        description=str(_first(data, "description", default="")),
        skills=_str_tuple(_first(data, "skills", "required_skills", "requiredSkills")),
        tags=_str_tuple(_first(data, "tags")),
        posted_date=_first(data, "posted_date", "postedDate"),
        deadline=_first(data, "deadline"),
        match_score=_score(_first(data, "match_score", "matchScore", default=0)),
        matched_skills=_str_tuple(_first(data, "matched_skills", "matchedSkills")),
        missing_skills=_str_tuple(_first(data, "missing_skills", "missingSkills")),
    )
