"""Filter and paginate job listings; explain listings against a resume."""
from __future__ import annotations

import math
import re
from collections.abc import Sequence
from typing import TypeVar

from skillmatch.log import get_logger
from skillmatch.models import JobFilters, JobListing, MatchExplanation, PaginatedResult
from skillmatch.skills import SkillDictionary, calculate_skill_match

log = get_logger(__name__)

T = TypeVar("T")

_SALARY_RE = re.compile(r"\$(\d+)k")


def parse_min_salary(salary: str | None) -> int | None:
    """Lower bound of a "$120k - $180k" style salary, in dollars."""
    m = _SALARY_RE.search(salary or "")
    if not m:
        return None
    return int(m.group(1)) * 1000


def _matches(job: JobListing, filters: JobFilters) -> bool:
    if filters.tags and not any(tag in job.tags for tag in filters.tags):
        return False
    if filters.location and filters.location.lower() not in job.location.lower():
        return False
    if filters.job_type and job.type.lower() != filters.job_type.lower():
        return False
    if filters.min_salary:
        floor = parse_min_salary(job.salary)
        # Unparseable salaries are kept
        if floor is not None and floor < filters.min_salary:
            return False
    if filters.min_match_score and job.match_score < filters.min_match_score:
        return False
    return True


def filter_jobs(jobs: Sequence[JobListing], filters: JobFilters | None = None) -> list[JobListing]:
    """Listings passing every set filter, in their original order."""
    if filters is None:
        return list(jobs)
    return [j for j in jobs if _matches(j, filters)]


def paginate(items: Sequence[T], page: int = 1, limit: int = 10) -> tuple[list[T], int, int, bool]:
    """Return (slice, total, total_pages, has_more). Requires page >= 1, limit >= 1."""
    total = len(items)
    total_pages = math.ceil(total / limit)
    start = (page - 1) * limit
    return list(items[start:start + limit]), total, total_pages, page < total_pages


def match_jobs_with_resume(
    resume_text: str,
    jobs: Sequence[JobListing],
    filters: JobFilters | None = None,
) -> PaginatedResult:
    """Filter *jobs* and return the requested page.

    Listing scores are precomputed upstream; *resume_text* does not change
    which listings pass or their order. See explain_match for the per-listing
    rationale built from the resume.
    """
    filters = filters or JobFilters()
    filtered = filter_jobs(jobs, filters)
    results, total, total_pages, has_more = paginate(filtered, filters.page, filters.limit)
    log.debug(
        "Filtered %d listings -> %d (page %d/%d, resume %d chars)",
        len(jobs), total, filters.page, total_pages, len(resume_text or ""),
    )
    return PaginatedResult(
        results=results,
        total=total,
        page=filters.page,
        total_pages=total_pages,
        has_more=has_more,
    )


def explain_match(
    resume_skills: Sequence[str],
    job: JobListing,
    dictionary: SkillDictionary,
) -> MatchExplanation:
    """Rationale for a listing: which of its known skills the resume covers."""
    required: list[str] = []
    for raw in job.skills:
        name = dictionary.resolve(raw)
        if name and name not in required:
            required.append(name)

    result = calculate_skill_match(resume_skills, required, dictionary)
    if result.matched:
        reason = f"Matched on skills: {', '.join(result.matched)}"
    elif required:
        reason = "No direct skill matches found"
    else:
        reason = "No recognized skills listed for this job"
    if result.missing:
        reason += f". Missing: {', '.join(result.missing)}"

    return MatchExplanation(
        job_id=job.id,
        matched=result.matched,
        missing=result.missing,
        score=result.score,
        reason=reason,
    )
