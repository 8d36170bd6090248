"""Job listings from a user-supplied JSON or YAML file."""
from __future__ import annotations

import json
from pathlib import Path

import yaml

from skillmatch.log import get_logger
from skillmatch.models import JobListing
from skillmatch.sources.base import JobCatalogBase, job_listing_from_dict

log = get_logger(__name__)


class FileCatalog(JobCatalogBase):
    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def _read(self) -> object:
        suffix = self.path.suffix.lower()
        with open(self.path, "r", encoding="utf-8") as f:
            if suffix == ".json":
                return json.load(f)
            if suffix in (".yaml", ".yml"):
                return yaml.safe_load(f)
        raise ValueError(f"Unsupported catalog format: {suffix}")

    def listings(self) -> list[JobListing]:
        data = self._read()
        if isinstance(data, dict):
            data = data.get("jobs", [])
        if not isinstance(data, list):
            raise ValueError(f"{self.path.name}: expected a list of jobs")

        jobs: list[JobListing] = []
        for i, item in enumerate(data):
            if not isinstance(item, dict):
                log.warning("Skipping catalog entry %d in %s: not a mapping", i, self.path.name)
                continue
            jobs.append(job_listing_from_dict(item))
        log.info("FileCatalog loaded %d listings from %s", len(jobs), self.path.name)
        return jobs
