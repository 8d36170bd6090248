#!/usr/bin/env python3
"""
Build a skill-match report from a resume, the job catalog and an
application history export.

    python run_report.py --resume resume.pdf --history applications.json
    python run_report.py --tags Frontend Mobile --min-score 80 --page 2
"""
from __future__ import annotations

import argparse
import sys
from datetime import date
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent))

from skillmatch.log import get_logger
from skillmatch.models import AnalyticsFilters, JobFilters

log = get_logger(__name__)


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be >= 1, got {number}")
    return number


def _day(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM-DD, got {value!r}") from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("--resume", type=Path, help="Resume file (.txt, .md, .docx, .pdf)")
    parser.add_argument("--history", type=Path, help="Application history export (.json or .csv)")
    parser.add_argument("--role", help="Target role for skill suggestions (frontend, backend, ...)")

    jobs = parser.add_argument_group("job filters")
    jobs.add_argument("--tags", nargs="+", default=[], help="Keep listings with any of these tags")
    jobs.add_argument("--location", default="", help="Location substring")
    jobs.add_argument("--job-type", default="", help="Exact job type, e.g. Full-time")
    jobs.add_argument("--min-salary", type=int, default=0, help="Minimum salary in dollars")
    jobs.add_argument("--min-score", type=int, default=0, help="Minimum precomputed match score")
    jobs.add_argument("--page", type=_positive_int, default=1)
    jobs.add_argument("--limit", type=_positive_int, default=None, help="Listings per page")

    history = parser.add_argument_group("analytics filters")
    history.add_argument("--since", type=_day, help="First day to include (YYYY-MM-DD)")
    history.add_argument("--until", type=_day, help="Last day to include (YYYY-MM-DD)")
    history.add_argument("--exclude-rejected", action="store_true")

    parser.add_argument("--no-write", action="store_true", help="Print the report instead of writing it")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    from skillmatch.config import load_settings
    from skillmatch.pipeline import run

    try:
        settings = load_settings()
        filters = JobFilters(
            tags=args.tags,
            location=args.location,
            job_type=args.job_type,
            min_salary=args.min_salary,
            min_match_score=args.min_score,
            page=args.page,
            limit=args.limit or settings["page_limit"],
        )
        analytics_filters = AnalyticsFilters(
            start_date=args.since,
            end_date=args.until,
            include_rejected=not args.exclude_rejected,
        )
        result = run(
            resume_path=args.resume,
            history_path=args.history,
            filters=filters,
            analytics_filters=analytics_filters,
            target_role=args.role,
            write=not args.no_write,
            settings=settings,
        )
    except (OSError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if args.no_write:
        print(result["report"])
    else:
        log.info("Report: %s", result["report_path"])
    log.info("  Listings matched: %d of %d", result["jobs_matched"], result["jobs_total"])
    log.info("  Applications analysed: %d", result["applications"])
    return 0


if __name__ == "__main__":
    sys.exit(main())
