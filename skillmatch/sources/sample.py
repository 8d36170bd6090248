"""Bundled sample catalog, used when no listing file is configured."""
from __future__ import annotations

from pathlib import Path

import yaml

from skillmatch.config import SAMPLE_JOBS_PATH
from skillmatch.log import get_logger
from skillmatch.models import JobListing
from skillmatch.sources.base import JobCatalogBase, job_listing_from_dict

log = get_logger(__name__)


class SampleCatalog(JobCatalogBase):
    def __init__(self, path: Path | None = None) -> None:
        self.path = path or SAMPLE_JOBS_PATH

    def listings(self) -> list[JobListing]:
        with open(self.path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        jobs = [job_listing_from_dict(item) for item in data.get("jobs", [])]
        log.info("SampleCatalog loaded %d sample listings", len(jobs))
        return jobs
