"""Lists derived from the current jobs and the saved / applied id sets.

Everything here is a pure function of its inputs. The lists are rebuilt
rather than kept in sync, and ids with no job in the current result set
simply do not show up.
"""
from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Iterable

from jobhub.models import Job


@dataclass(frozen=True)
class JobViews:
    visible: tuple[Job, ...]
    saved: tuple[Job, ...]
    applied: tuple[Job, ...]
    saved_count: int
    applied_count: int

    @property
    def visible_count(self) -> int:
        return len(self.visible)


def visible_jobs(jobs: Iterable[Job], applied_ids: frozenset[str]) -> list[Job]:
    return [j for j in jobs if j.id not in applied_ids]


def saved_jobs_details(jobs: Iterable[Job], saved_ids: frozenset[str]) -> list[Job]:
    return [j for j in jobs if j.id in saved_ids]


def applied_jobs_details(jobs: Iterable[Job], applied_ids: frozenset[str]) -> list[Job]:
    return [j for j in jobs if j.id in applied_ids]


@lru_cache(maxsize=32)
def build_views(
    jobs: tuple[Job, ...],
    saved_ids: frozenset[str],
    applied_ids: frozenset[str],
) -> JobViews:
    """All three lists at once, memoized on the (immutable) inputs."""
    return JobViews(
        visible=tuple(visible_jobs(jobs, applied_ids)),
        saved=tuple(saved_jobs_details(jobs, saved_ids)),
        applied=tuple(applied_jobs_details(jobs, applied_ids)),
        saved_count=len(saved_ids),
        applied_count=len(applied_ids),
    )
