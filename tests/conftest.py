from __future__ import annotations

import os

os.environ.setdefault("SKILLMATCH_LOG_FILE", "0")

import pytest

from skillmatch.models import ApplicationStatus, JobApplication, JobListing
from skillmatch.skills import SkillDictionary, load_skill_dictionary
from skillmatch.sources import SampleCatalog


@pytest.fixture
def dictionary() -> SkillDictionary:
    return load_skill_dictionary()


@pytest.fixture
def sample_jobs() -> list[JobListing]:
    return SampleCatalog().listings()


@pytest.fixture
def make_app():
    counter = {"n": 0}

    def _make(status: ApplicationStatus | str = ApplicationStatus.APPLIED, **kwargs) -> JobApplication:
        counter["n"] += 1
        kwargs.setdefault("id", f"app_{counter['n']}")
        return JobApplication(status=ApplicationStatus.parse(status), **kwargs)

    return _make


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch):
    for key in ("SKILLMATCH_CATALOG_PATH", "SKILLMATCH_SKILLS_PATH", "SKILLMATCH_PAGE_LIMIT"):
        monkeypatch.delenv(key, raising=False)
