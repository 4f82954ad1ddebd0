from __future__ import annotations

from conftest import make_job
from jobhub.views import (
    applied_jobs_details,
    build_views,
    saved_jobs_details,
    visible_jobs,
)


def _ids(jobs):
    return [j.id for j in jobs]


def test_visible_excludes_applied_and_keeps_order(jobs):
    applied = frozenset({"job-2", "job-5"})
    visible = visible_jobs(jobs, applied)

    assert _ids(visible) == [j.id for j in jobs if j.id not in applied]
    assert len(visible) == len(jobs) - 2


def test_saved_details_follow_job_order_not_save_order(jobs):
    saved = frozenset({"job-9", "job-1", "job-4"})
    assert _ids(saved_jobs_details(jobs, saved)) == ["job-1", "job-4", "job-9"]


def test_applied_details_hold_full_records(jobs):
    details = applied_jobs_details(jobs, frozenset({"job-7"}))
    assert details == [jobs[6]]


def test_unknown_ids_are_silently_dropped(jobs):
    ghosts = frozenset({"job-404", "job-500"})
    assert saved_jobs_details(jobs, ghosts) == []
    assert applied_jobs_details(jobs, ghosts) == []
    assert visible_jobs(jobs, ghosts) == jobs


def test_job_can_be_saved_and_applied(jobs):
    both = frozenset({"job-3"})
    views = build_views(tuple(jobs), both, both)

    assert "job-3" not in _ids(views.visible)
    assert _ids(views.saved) == ["job-3"]
    assert _ids(views.applied) == ["job-3"]


def test_counts_reflect_id_sets_not_details(jobs):
    views = build_views(tuple(jobs), frozenset({"job-1", "gone"}), frozenset({"old-1", "old-2"}))

    assert views.saved_count == 2
    assert len(views.saved) == 1
    assert views.applied_count == 2
    assert views.applied == ()
    assert views.visible_count == len(jobs)


def test_empty_job_list_gives_empty_views():
    views = build_views((), frozenset({"a"}), frozenset({"b"}))
    assert views.visible == views.saved == views.applied == ()


def test_build_views_is_memoized_by_value():
    first = build_views((make_job("a"), make_job("b")), frozenset({"a"}), frozenset())
    second = build_views((make_job("a"), make_job("b")), frozenset({"a"}), frozenset())
    assert first is second


def test_build_views_recomputes_when_inputs_change():
    jobs = (make_job("a"), make_job("b"))
    before = build_views(jobs, frozenset(), frozenset())
    after = build_views(jobs, frozenset(), frozenset({"a"}))

    assert before is not after
    assert _ids(after.visible) == ["b"]
