from __future__ import annotations

import json

import pytest

from skillmatch.config import get_env
from skillmatch.sources import FileCatalog, SampleCatalog, get_catalog, job_listing_from_dict


def test_sample_catalog(sample_jobs):
    assert [j.id for j in sample_jobs] == ["1", "2", "3", "4", "5"]
    first = sample_jobs[0]
    assert first.title == "Senior React Developer"
    assert first.match_score == 95
    assert "React" in first.skills
    assert first.tags == ("Frontend", "Remote", "Senior")


def test_listing_from_camel_case():
    job = job_listing_from_dict({
        "jobId": 7,
        "title": "Data Engineer",
        "company_name": "Acme",
        "jobType": "Contract",
        "requiredSkills": "Python, SQL , AWS",
        "matchScore": "77.6",
        "postedDate": "2024-01-01",
    })
    assert job.id == "7"
    assert job.company == "Acme"
    assert job.type == "Contract"
    assert job.skills == ("Python", "SQL", "AWS")
    assert job.match_score == 78
    assert job.posted_date == "2024-01-01"
    assert job.tags == ()


def test_listing_without_id_is_hashed():
    a = job_listing_from_dict({"title": "Dev", "company": "Acme"})
    b = job_listing_from_dict({"title": "Dev", "company": "Acme"})
    c = job_listing_from_dict({"title": "Dev", "company": "Other"})
    assert a.id == b.id
    assert a.id != c.id


def test_file_catalog_json(tmp_path):
    path = tmp_path / "jobs.json"
    path.write_text(json.dumps([
        {"id": "x1", "title": "Backend Dev", "company": "Acme", "skills": ["Python"]},
        "junk",
    ]))
    jobs = FileCatalog(path).listings()
    assert [j.id for j in jobs] == ["x1"]
    assert jobs[0].skills == ("Python",)


def test_file_catalog_yaml_with_jobs_key(tmp_path):
    path = tmp_path / "jobs.yaml"
    path.write_text(
        "jobs:\n"
        "  - id: y1\n"
        "    title: Mobile Dev\n"
        "    company: Apps Co\n"
        "    tags: [Mobile, Remote]\n"
    )
    jobs = FileCatalog(path).listings()
    assert jobs[0].tags == ("Mobile", "Remote")


def test_file_catalog_rejects_unknown_format(tmp_path):
    path = tmp_path / "jobs.txt"
    path.write_text("")
    with pytest.raises(ValueError, match="Unsupported catalog format"):
        FileCatalog(path).listings()


def test_get_catalog_selection(tmp_path, monkeypatch):
    assert isinstance(get_catalog({}, get_env), SampleCatalog)
    assert isinstance(get_catalog({"catalog_path": str(tmp_path / "missing.json")}, get_env), SampleCatalog)

    path = tmp_path / "jobs.json"
    path.write_text("[]")
    catalog = get_catalog({"catalog_path": str(path)}, get_env)
    assert isinstance(catalog, FileCatalog)
    assert catalog.listings() == []

    other = tmp_path / "other.json"
    other.write_text("[]")
    monkeypatch.setenv("SKILLMATCH_CATALOG_PATH", str(other))
    assert get_catalog({"catalog_path": str(path)}, get_env).path == other
