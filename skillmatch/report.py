"""Render match pages and application analytics as markdown."""
from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

from skillmatch.config import REPORTS_DIR
from skillmatch.log import get_logger
from skillmatch.models import AnalyticsData, MatchExplanation, PaginatedResult

log = get_logger(__name__)


def _clip(text: str, width: int) -> str:
    return text[:width] + ("…" if len(text) > width else "")


def _today() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%d")


def build_match_report(
    page: PaginatedResult,
    explanations: dict[str, MatchExplanation] | None = None,
) -> str:
    explanations = explanations or {}
    lines: list[str] = [f"# Job Matches — {_today()}", ""]
    lines.append(
        f"**{page.total}** listings match | page **{page.page}** of **{max(page.total_pages, 1)}**"
        + (" | more available" if page.has_more else "")
    )
    lines.append("")

    if not page.results:
        lines.append("_No listings on this page._")
        lines.append("")
        return "\n".join(lines)

    for job in page.results:
        lines.append(f"### {job.title} @ {job.company}")
        lines.append(f"- **Match:** {job.match_score}%")
        lines.append(f"- **Location:** {job.location or '—'} | **Type:** {job.type or '—'}")
        if job.salary:
            lines.append(f"- **Salary:** {job.salary}")
        if job.tags:
            lines.append(f"- **Tags:** {', '.join(job.tags)}")
        exp = explanations.get(job.id)
        if exp is not None:
            lines.append(f"- **Why:** {exp.reason}")
        lines.append("")

    lines.append("---")
    lines.append("")
    lines.append("## Quick Reference")
    lines.append("")
    lines.append("| # | Role | Company | Location | Match | Resume fit |")
    lines.append("|--:|------|---------|----------|------:|-----------:|")
    for i, job in enumerate(page.results, 1):
        exp = explanations.get(job.id)
        fit = f"{exp.score}%" if exp is not None else "—"
        loc = job.location.split(",")[0][:18]
        lines.append(
            f"| {i} | {_clip(job.title, 40)} | {_clip(job.company, 22)} | {loc} "
            f"| {job.match_score}% | {fit} |"
        )
    lines.append("")
    return "\n".join(lines)


def build_analytics_report(analytics: AnalyticsData, top_skills: int = 10) -> str:
    lines: list[str] = ["## Application Analytics", ""]
    if not analytics.total_applications:
        lines.append("_No applications tracked yet._")
        lines.append("")
        return "\n".join(lines)

    lines.append(
        f"**{analytics.total_applications}** applications | "
        f"**{analytics.pending_applications}** pending | "
        f"**{analytics.success_rate}%** success | "
        f"avg match **{analytics.avg_match_score}%**"
    )
    lines.append("")

    lines.append("### By Status")
    lines.append("")
    lines.append("| Status | Count |")
    lines.append("|--------|------:|")
    for sc in analytics.applications_by_status:
        lines.append(f"| {sc.status.value} | {sc.count} |")
    lines.append("")

    if analytics.top_skills:
        lines.append("### Top Skills")
        lines.append("")
        for sk in analytics.top_skills[:top_skills]:
            lines.append(f"- **{sk.skill}** — {sk.count}")
        lines.append("")

    if analytics.companies_applied_to:
        lines.append("### Companies")
        lines.append("")
        lines.append(", ".join(analytics.companies_applied_to))
        lines.append("")

    if analytics.application_timeline:
        lines.append("### Timeline")
        lines.append("")
        lines.append("| Date | Applications |")
        lines.append("|------|-------------:|")
        for point in analytics.application_timeline:
            lines.append(f"| {point.date} | {point.count} |")
        lines.append("")

    return "\n".join(lines)


def build_suggestions_section(suggestions: list[str], role: str | None = None) -> str:
    heading = f"## Skill Suggestions ({role})" if role else "## Skill Suggestions"
    lines: list[str] = [heading, ""]
    if not suggestions:
        lines.append("_Your skills already cover the recommended set._")
    for s in suggestions:
        lines.append(f"- {s}")
    lines.append("")
    return "\n".join(lines)


def write_report(content: str, name: str = "report", reports_dir: Path | None = None) -> Path:
    reports_dir = reports_dir or REPORTS_DIR
    reports_dir.mkdir(parents=True, exist_ok=True)
    path = reports_dir / f"{name}_{_today()}.md"
    path.write_text(content, encoding="utf-8")
    log.info("Report written → %s", path)
    return path
