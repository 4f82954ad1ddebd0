"""Data models for search filters, jobs and the search lifecycle."""
from __future__ import annotations

import json
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any

from jobhub.errors import JobSchemaError
from jobhub.log import get_logger

log = get_logger(__name__)


class LoadingState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


class JobSource(str, Enum):
    LINKEDIN = "LinkedIn"
    BANK_104 = "104"
    BANK_1111 = "1111"
    CAKERESUME = "CakeResume"
    YOURATOR = "Yourator"
    OTHER = "Other"

    @classmethod
    def from_label(cls, label: str) -> JobSource:
        """Map a provider label such as "104 Job Bank" onto a known source."""
        text = label.strip().lower()
        for source in cls:
            if source is not cls.OTHER and text.startswith(source.value.lower()):
                return source
        return cls.OTHER


@dataclass(frozen=True)
class SearchFilters:
    job_title: str = ""
    industries: tuple[str, ...] = ()
    locations: tuple[str, ...] = ()
    experience_levels: tuple[str, ...] = ()

    def with_changes(self, **changes: Any) -> SearchFilters:
        """Return a new filter set; list values are frozen into tuples."""
        frozen = {
            key: value if key == "job_title" else tuple(value)
            for key, value in changes.items()
        }
        return replace(self, **frozen)

    def is_empty(self) -> bool:
        return not (
            self.job_title.strip()
            or self.industries
            or self.locations
            or self.experience_levels
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "jobTitle": self.job_title,
            "industries": list(self.industries),
            "locations": list(self.locations),
            "experienceLevels": list(self.experience_levels),
        }


@dataclass(frozen=True)
class LinkedInProfile:
    name: str
    role: str
    url: str


@dataclass(frozen=True)
class Job:
    id: str
    title: str
    company: str
    source: JobSource
    description: str
    link: str
    requirements: tuple[str, ...] = ()
    location: str = ""
    salary: str = ""
    experience: str = ""
    industry: str = ""
    posted_at: str | None = None
    linkedin_employees: tuple[LinkedInProfile, ...] = ()
    mentor_analysis: str | None = None
    company_reviews: str | None = None

    @classmethod
    def from_dict(cls, payload: Any) -> Job:
        """Build a Job from the provider's camelCase JSON object."""
        if not isinstance(payload, dict):
            raise JobSchemaError(f"job entry must be an object, got {type(payload).__name__}")

        requirements = payload.get("requirements")
        if not isinstance(requirements, list) or not all(isinstance(r, str) for r in requirements):
            raise JobSchemaError("job field 'requirements' must be a list of strings")

        return cls(
            id=_required_text(payload, "id"),
            title=_required_text(payload, "title"),
            company=_required_text(payload, "company"),
            source=JobSource.from_label(_required_text(payload, "source")),
            description=_required_text(payload, "description"),
            link=_required_text(payload, "link"),
            requirements=tuple(requirements),
            location=_optional_text(payload, "location") or "",
            salary=_optional_text(payload, "salary") or "",
            experience=_optional_text(payload, "experience") or "",
            industry=_optional_text(payload, "industry") or "",
            posted_at=_optional_text(payload, "postedAt"),
            linkedin_employees=_profiles(payload.get("linkedInEmployees")),
            mentor_analysis=_optional_text(payload, "mentorAnalysis"),
            company_reviews=_optional_text(payload, "companyReviews"),
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "company": self.company,
            "location": self.location,
            "salary": self.salary,
            "experience": self.experience,
            "industry": self.industry,
            "source": self.source.value,
            "description": self.description,
            "requirements": list(self.requirements),
            "link": self.link,
        }
        if self.posted_at is not None:
            data["postedAt"] = self.posted_at
        if self.linkedin_employees:
            data["linkedInEmployees"] = [
                {"name": p.name, "role": p.role, "url": p.url} for p in self.linkedin_employees
            ]
        if self.mentor_analysis is not None:
            data["mentorAnalysis"] = self.mentor_analysis
        if self.company_reviews is not None:
            data["companyReviews"] = self.company_reviews
        return data


def _required_text(payload: dict, key: str) -> str:
    if key not in payload or payload[key] is None:
        raise JobSchemaError(f"job is missing required field {key!r}")
    value = payload[key]
    if not isinstance(value, str):
        raise JobSchemaError(f"job field {key!r} must be a string")
    return value


def _optional_text(payload: dict, key: str) -> str | None:
    value = payload.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise JobSchemaError(f"job field {key!r} must be a string")
    return value


def _profiles(value: Any) -> tuple[LinkedInProfile, ...]:
    if value is None:
        return ()
    if not isinstance(value, list):
        raise JobSchemaError("job field 'linkedInEmployees' must be a list")
    profiles: list[LinkedInProfile] = []
    for entry in value:
        if not isinstance(entry, dict):
            raise JobSchemaError("linkedInEmployees entries must be objects")
        profiles.append(
            LinkedInProfile(
                name=_required_text(entry, "name"),
                role=_required_text(entry, "role"),
                url=_required_text(entry, "url"),
            )
        )
    return tuple(profiles)


def parse_jobs(text: str) -> list[Job]:
    """Decode a provider response into jobs, keeping provider order.

    Accepts a JSON array of job objects or an object wrapping it under
    ``jobs``. A repeated id keeps its first occurrence.
    """
    try:
        data = json.loads(text or "")
    except json.JSONDecodeError as exc:
        raise JobSchemaError(f"provider response is not valid JSON: {exc}") from exc

    if isinstance(data, dict) and "jobs" in data:
        data = data["jobs"]
    if not isinstance(data, list):
        raise JobSchemaError("provider response must be a list of jobs")

    jobs: list[Job] = []
    seen: set[str] = set()
    for entry in data:
        job = Job.from_dict(entry)
        if job.id in seen:
            log.warning("Dropping duplicate job id %r from provider response", job.id)
            continue
        seen.add(job.id)
        jobs.append(job)
    return jobs
