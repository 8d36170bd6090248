"""
Skill-match report pipeline.

Runs: settings → skill dictionary → catalog → filter/page → explanations
→ history analytics → suggestions → markdown report.
"""
from __future__ import annotations

from pathlib import Path
from typing import Any

from skillmatch.analytics import get_application_analytics
from skillmatch.config import ensure_dirs, get_env, get_skills_path, load_settings
from skillmatch.history import load_applications
from skillmatch.jobs import explain_match, match_jobs_with_resume
from skillmatch.log import get_logger
from skillmatch.models import AnalyticsData, AnalyticsFilters, JobApplication, JobFilters
from skillmatch.report import (
    build_analytics_report,
    build_match_report,
    build_suggestions_section,
    write_report,
)
from skillmatch.resume import load_resume_text
from skillmatch.skills import extract_skills, load_skill_dictionary, suggest_skill_improvements
from skillmatch.sources import get_catalog

log = get_logger(__name__)


def run(
    *,
    resume_path: Path | None = None,
    history_path: Path | None = None,
    filters: JobFilters | None = None,
    analytics_filters: AnalyticsFilters | None = None,
    target_role: str | None = None,
    write: bool = True,
    settings: dict[str, Any] | None = None,
    reports_dir: Path | None = None,
) -> dict[str, Any]:
    settings = settings or load_settings()
    dictionary = load_skill_dictionary(get_skills_path(settings))
    filters = filters or JobFilters(limit=settings["page_limit"])

    # 1. Resume
    resume_text = load_resume_text(resume_path) if resume_path else ""
    resume_skills = extract_skills(resume_text, dictionary)
    if resume_path:
        log.info("Resume mentions %d known skills", len(resume_skills))
    else:
        log.info("No resume given, explanations will list every skill as missing")

    # 2. Catalog → filtered page
    jobs = get_catalog(settings, get_env).listings()
    page = match_jobs_with_resume(resume_text, jobs, filters)
    explanations = {job.id: explain_match(resume_skills, job, dictionary) for job in page.results}

    # 3. History → analytics
    applications: list[JobApplication] = load_applications(history_path) if history_path else []
    analytics: AnalyticsData = get_application_analytics(applications, dictionary, analytics_filters)

    # 4. Suggestions
    suggestions = suggest_skill_improvements(resume_skills, target_role, dictionary)

    sections = [build_match_report(page, explanations)]
    if history_path:
        sections.append(build_analytics_report(analytics, settings["top_skills_in_report"]))
    sections.append(build_suggestions_section(suggestions, target_role))
    content = "\n".join(sections)

    report_path = None
    if write:
        if reports_dir is None:
            ensure_dirs()
        report_path = write_report(content, name="skillmatch", reports_dir=reports_dir)

    log.info(
        "Run complete: listings=%d, matched=%d, applications=%d",
        len(jobs), page.total, analytics.total_applications,
    )

    return {
        "jobs_total": len(jobs),
        "jobs_matched": page.total,
        "page": page.page,
        "total_pages": page.total_pages,
        "applications": analytics.total_applications,
        "success_rate": analytics.success_rate,
        "resume_skills": resume_skills,
        "analytics": analytics.to_dict(),
        "report": content,
        "report_path": str(report_path) if report_path else None,
        "report_preview": content[:2000] + "..." if len(content) > 2000 else content,
    }
