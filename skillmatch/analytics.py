"""Roll up a user's application history into dashboard analytics."""
from __future__ import annotations

import math
from collections import Counter
from collections.abc import Sequence
from datetime import date, datetime, timezone

from skillmatch.log import get_logger
from skillmatch.models import (
    PENDING_STATUSES,
    SUCCESS_STATUSES,
    AnalyticsData,
    AnalyticsFilters,
    ApplicationStatus,
    JobApplication,
    SkillCount,
    StatusCount,
    TimelinePoint,
)
from skillmatch.skills import SkillDictionary, extract_skills, round_half_up

log = get_logger(__name__)

UNKNOWN_COMPANY = "Unknown Company"


def _utc_day(ts: datetime) -> date:
    if ts.tzinfo is None:
        return ts.date()
    return ts.astimezone(timezone.utc).date()


def apply_filters(
    applications: Sequence[JobApplication],
    filters: AnalyticsFilters | None,
) -> list[JobApplication]:
    """Drop applications outside the date window or with excluded statuses."""
    if filters is None:
        return list(applications)
    kept: list[JobApplication] = []
    bounded = filters.start_date is not None or filters.end_date is not None
    for app in applications:
        if not filters.include_rejected and app.status is ApplicationStatus.REJECTED:
            continue
        if bounded:
            ts = app.timestamp
            if ts is None:
                continue
            day = _utc_day(ts)
            if filters.start_date and day < filters.start_date:
                continue
            if filters.end_date and day > filters.end_date:
                continue
        kept.append(app)
    return kept


def status_counts(applications: Sequence[JobApplication]) -> list[StatusCount]:
    """Per-status tallies in enum order; zero counts are omitted."""
    counts: dict[ApplicationStatus, int] = {s: 0 for s in ApplicationStatus}
    for app in applications:
        counts[app.status] += 1
    return [StatusCount(status=s, count=n) for s, n in counts.items() if n > 0]


def _match_score(app: JobApplication) -> float:
    if app.job is not None and app.job.match_score:
        return app.job.match_score
    score = app.match_score
    return score if score is not None and math.isfinite(score) else 0


def _canonical(raw: str, dictionary: SkillDictionary) -> list[str]:
    name = dictionary.resolve(raw)
    return [name] if name else extract_skills(raw, dictionary)


def top_skills(applications: Sequence[JobApplication], dictionary: SkillDictionary) -> list[SkillCount]:
    """Rank skills across applications.

    Each matched skill on a job counts once, and each required job skill the
    resume snapshot confirms counts once more. A snapshot is scanned in full
    only while nothing has been counted yet.
    """
    counter: Counter[str] = Counter()
    for app in applications:
        job = app.job
        if job is not None:
            for raw in job.matched_skills:
                counter.update(_canonical(raw, dictionary))
            if job.skills and app.resume_snapshot:
                in_resume = set(extract_skills(app.resume_snapshot, dictionary))
                for raw in job.skills:
                    counter.update(s for s in _canonical(raw, dictionary) if s in in_resume)
        if app.resume_snapshot and not counter:
            counter.update(extract_skills(app.resume_snapshot, dictionary))
    # sorted() is stable, so ties keep first-seen order
    ranked = sorted(counter.items(), key=lambda kv: kv[1], reverse=True)
    return [SkillCount(skill=s, count=n) for s, n in ranked]


def _company_label(app: JobApplication) -> str:
    if app.company:
        return app.company
    if app.job is not None and app.job.company:
        return app.job.company
    title = app.job_title or (app.job.title if app.job is not None else "")
    if title:
        return f"Unknown ({title})"
    return UNKNOWN_COMPANY


def companies(applications: Sequence[JobApplication]) -> list[str]:
    return list(dict.fromkeys(_company_label(app) for app in applications))


def timeline(applications: Sequence[JobApplication]) -> list[TimelinePoint]:
    """Applications per calendar day (UTC), oldest first."""
    per_day: Counter[date] = Counter()
    for app in applications:
        ts = app.timestamp
        if ts is not None:
            per_day[_utc_day(ts)] += 1
    return [TimelinePoint(date=d.isoformat(), count=per_day[d]) for d in sorted(per_day)]


def get_application_analytics(
    applications: Sequence[JobApplication],
    dictionary: SkillDictionary,
    filters: AnalyticsFilters | None = None,
) -> AnalyticsData:
    """Aggregate *applications*; an empty history yields an all-zero result."""
    apps = apply_filters(applications, filters)
    total = len(apps)
    if not total:
        log.debug("No applications to analyse")
        return AnalyticsData()

    pending = sum(1 for a in apps if a.status in PENDING_STATUSES)
    successful = sum(1 for a in apps if a.status in SUCCESS_STATUSES)
    score_sum = sum(_match_score(a) for a in apps)

    data = AnalyticsData(
        total_applications=total,
        applications_by_status=status_counts(apps),
        pending_applications=pending,
        success_rate=round_half_up(successful / total * 100),
        avg_match_score=round_half_up(score_sum / total),
        top_skills=top_skills(apps, dictionary),
        companies_applied_to=companies(apps),
        application_timeline=timeline(apps),
    )
    log.debug(
        "Analytics: %d applications, %d pending, success %d%%",
        total, pending, data.success_rate,
    )
    return data
