from __future__ import annotations

import threading
import time
from typing import Any

import pytest

from jobhub.models import Job, JobSource, SearchFilters
from jobhub.providers.base import JobProvider
from jobhub.store import IdStore

_ENV_KEYS = (
    "JOBHUB_PROVIDER", "JOBHUB_DATA_DIR", "JOBHUB_SEARCH_TIMEOUT", "JOBHUB_ERROR_MESSAGE",
    "GROQ_API_KEY", "GROQ_LLM_MODEL", "GEMINI_API_KEY", "GEMINI_MODEL",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch, tmp_path):
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("JOBHUB_DATA_DIR", str(tmp_path / "data"))


def make_job(job_id: str, **overrides: Any) -> Job:
    fields: dict[str, Any] = {
        "id": job_id,
        "title": f"Engineer {job_id}",
        "company": "Acme",
        "source": JobSource.LINKEDIN,
        "description": "Build things.",
        "link": f"https://example.com/{job_id}",
        "requirements": ("Python",),
        "location": "台北市",
    }
    fields.update(overrides)
    return Job(**fields)


def job_payload(job_id: str, **overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "id": job_id,
        "title": "後端工程師",
        "company": "Acme",
        "location": "台北市",
        "salary": "NT$ 60K - 80K",
        "experience": "3-5 年",
        "industry": "軟體及網路",
        "source": "104 Job Bank",
        "description": "負責 API 開發",
        "requirements": ["Python", "PostgreSQL"],
        "postedAt": "2 天前",
        "link": f"https://example.com/{job_id}",
        "linkedInEmployees": [
            {"name": "王小明", "role": "Senior Engineer", "url": "https://linkedin.com/in/a"},
        ],
        "mentorAnalysis": "多數具備資工背景。",
        "companyReviews": "評價良好。",
    }
    payload.update(overrides)
    return payload


class FakeProvider(JobProvider):
    """Scripted provider: returns ``jobs`` or raises ``error``; may block on ``gate``."""

    name = "fake"

    def __init__(self, jobs: list[Job] | None = None, error: Exception | None = None) -> None:
        self.jobs = list(jobs or [])
        self.error = error
        self.gate: threading.Event | None = None
        self.calls: list[SearchFilters] = []

    def fetch_jobs(self, filters: SearchFilters) -> list[Job]:
        # Snapshot the script first so a test can change it for the next call.
        gate, jobs, error = self.gate, list(self.jobs), self.error
        self.calls.append(filters)
        if gate is not None:
            gate.wait(5)
        if error is not None:
            raise error
        return jobs

    def wait_for_calls(self, n: int, timeout: float = 5.0) -> None:
        deadline = time.monotonic() + timeout
        while len(self.calls) < n:
            if time.monotonic() > deadline:
                raise AssertionError(f"provider saw {len(self.calls)} call(s), expected {n}")
            time.sleep(0.005)


@pytest.fixture
def store(tmp_path) -> IdStore:
    return IdStore(tmp_path / "store")


@pytest.fixture
def jobs() -> list[Job]:
    return [make_job(f"job-{n}") for n in range(1, 11)]
