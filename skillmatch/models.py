"""Data models for skills, job listings, applications and analytics."""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import date, datetime
from enum import Enum


class SkillCategory(Enum):
    CORE_LANGUAGES = "core_languages"
    FRAMEWORKS = "frameworks"
    DATABASES = "databases"
    CLOUD = "cloud"
    TOOLS = "tools"


class ApplicationStatus(Enum):
    SAVED = "saved"
    APPLIED = "applied"
    SUBMITTED = "submitted"
    PENDING = "pending"
    INTERVIEW = "interview"
    OFFERED = "offered"
    ACCEPTED = "accepted"
    REJECTED = "rejected"

    @classmethod
    def parse(cls, value: str | ApplicationStatus) -> ApplicationStatus:
        """Normalize a raw status string; raises ValueError when unknown."""
        if isinstance(value, cls):
            return value
        key = str(value or "").strip().lower().replace("-", "_").replace(" ", "_")
        key = _STATUS_ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            raise ValueError(f"Unknown application status: {value!r}") from None


_STATUS_ALIASES: dict[str, str] = {
    "interviewing": "interview",
    "interview_scheduled": "interview",
    "offer": "offered",
    "offer_received": "offered",
    "declined": "rejected",
    "in_review": "pending",
    "under_review": "pending",
}

PENDING_STATUSES: frozenset[ApplicationStatus] = frozenset({
    ApplicationStatus.APPLIED,
    ApplicationStatus.SUBMITTED,
    ApplicationStatus.PENDING,
    ApplicationStatus.INTERVIEW,
})
SUCCESS_STATUSES: frozenset[ApplicationStatus] = frozenset({
    ApplicationStatus.OFFERED,
    ApplicationStatus.ACCEPTED,
})


@dataclass(frozen=True)
class SkillDefinition:
    name: str
    category: SkillCategory
    weight: float
    aliases: tuple[str, ...] = ()


@dataclass
class SkillMatchResult:
    matched: list[str]
    missing: list[str]
    score: int
    matched_by_category: dict[SkillCategory, list[str]]

    def to_dict(self) -> dict:
        return {
            "matched": list(self.matched),
            "missing": list(self.missing),
            "score": self.score,
            "matched_by_category": {
                cat.value: list(names) for cat, names in self.matched_by_category.items()
            },
        }


@dataclass(frozen=True)
class JobListing:
    id: str
    title: str
    company: str
    location: str = ""
    type: str = ""
    salary: str = ""
    description: str = ""
    skills: tuple[str, ...] = ()
    tags: tuple[str, ...] = ()
    posted_date: str | None = None
    deadline: str | None = None
    match_score: int = 0
    matched_skills: tuple[str, ...] = ()
    missing_skills: tuple[str, ...] = ()


@dataclass
class JobApplication:
    id: str
    status: ApplicationStatus
    job_id: str = ""
    user_id: str = ""
    applied_date: datetime | None = None
    applied_at: datetime | None = None
    updated_at: datetime | None = None
    resume_snapshot: str = ""
    job: JobListing | None = None
    company: str = ""
    job_title: str = ""
    match_score: float | None = None
    notes: str = ""

    def __post_init__(self) -> None:
        self.status = ApplicationStatus.parse(self.status)

    @property
    def timestamp(self) -> datetime | None:
        """First available of applied date, applied-at, last update."""
        return self.applied_date or self.applied_at or self.updated_at


@dataclass
class JobFilters:
    tags: list[str] = field(default_factory=list)
    location: str = ""
    job_type: str = ""
    min_salary: int = 0
    min_match_score: int = 0
    page: int = 1
    limit: int = 10

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValueError(f"page must be >= 1, got {self.page}")
        if self.limit < 1:
            raise ValueError(f"limit must be >= 1, got {self.limit}")


@dataclass
class PaginatedResult:
    results: list[JobListing]
    total: int
    page: int
    total_pages: int
    has_more: bool


@dataclass
class MatchExplanation:
    job_id: str
    matched: list[str]
    missing: list[str]
    score: int
    reason: str


@dataclass
class StatusCount:
    status: ApplicationStatus
    count: int


@dataclass
class SkillCount:
    skill: str
    count: int


@dataclass
class TimelinePoint:
    date: str
    count: int


@dataclass
class AnalyticsFilters:
    start_date: date | None = None
    end_date: date | None = None
    include_rejected: bool = True


@dataclass
class AnalyticsData:
    total_applications: int = 0
    applications_by_status: list[StatusCount] = field(default_factory=list)
    pending_applications: int = 0
    success_rate: int = 0
    avg_match_score: int = 0
    top_skills: list[SkillCount] = field(default_factory=list)
    companies_applied_to: list[str] = field(default_factory=list)
    application_timeline: list[TimelinePoint] = field(default_factory=list)

    def to_dict(self) -> dict:
        data = asdict(self)
        data["applications_by_status"] = [
            {"status": s.status.value, "count": s.count} for s in self.applications_by_status
        ]
        return data
