from __future__ import annotations

import threading

import pytest

from conftest import FakeProvider, make_job
from jobhub.config import DEFAULT_ERROR_MESSAGE
from jobhub.controller import SearchController
from jobhub.errors import JobSchemaError, ProviderError
from jobhub.models import LoadingState, SearchFilters


@pytest.fixture
def provider(jobs):
    return FakeProvider(jobs)


@pytest.fixture
def controller(provider):
    c = SearchController(provider, timeout=5)
    yield c
    c.close()


def test_starts_idle(controller):
    assert controller.state is LoadingState.IDLE
    assert controller.jobs == ()
    assert controller.error is None
    assert controller.last_filters is None


def test_successful_search_replaces_jobs(controller, jobs):
    result = controller.search(SearchFilters())

    assert result == jobs
    assert controller.jobs == tuple(jobs)
    assert controller.state is LoadingState.SUCCESS
    assert controller.error is None


def test_empty_filters_are_sent_as_is(controller, provider):
    controller.search(SearchFilters())
    assert provider.calls == [SearchFilters()]


def test_new_search_fully_replaces_previous_list(controller, provider):
    controller.search(SearchFilters())
    provider.jobs = [make_job("new-1")]
    controller.search(SearchFilters(job_title="PM"))
    assert [j.id for j in controller.jobs] == ["new-1"]


def test_zero_results_is_success(controller, provider):
    provider.jobs = []
    controller.search(SearchFilters())
    assert controller.state is LoadingState.SUCCESS
    assert controller.jobs == ()


@pytest.mark.parametrize(
    "error",
    [ProviderError("boom"), JobSchemaError("bad json"), ConnectionError("offline"), ValueError("x")],
)
def test_failure_becomes_error_state(controller, provider, error):
    controller.search(SearchFilters())
    provider.error = error

    result = controller.search(SearchFilters(job_title="QA"))

    assert result == []
    assert controller.state is LoadingState.ERROR
    assert controller.error == DEFAULT_ERROR_MESSAGE
    # The earlier successful list is not kept around.
    assert controller.jobs == ()


def test_error_message_is_configurable(provider, monkeypatch):
    monkeypatch.setenv("JOBHUB_ERROR_MESSAGE", "Could not load jobs.")
    provider.error = ProviderError("boom")
    c = SearchController(provider, timeout=5)
    try:
        c.search(SearchFilters())
        assert c.error == "Could not load jobs."
    finally:
        c.close()


def test_new_search_clears_previous_error(controller, provider, jobs):
    provider.error = ProviderError("boom")
    controller.search(SearchFilters())
    provider.error = None

    controller.search(SearchFilters())

    assert controller.state is LoadingState.SUCCESS
    assert controller.error is None
    assert controller.jobs == tuple(jobs)


def test_retry_reuses_last_filters(controller, provider):
    filters = SearchFilters(job_title="資料科學家", locations=("台北市",))
    provider.error = ProviderError("boom")
    controller.search(filters)
    provider.error = None

    controller.retry()

    assert provider.calls == [filters, filters]
    assert controller.state is LoadingState.SUCCESS


def test_retry_without_history_searches_everything(controller, provider):
    controller.retry()
    assert provider.calls == [SearchFilters()]


def test_loading_while_in_flight(controller, provider, jobs):
    provider.gate = threading.Event()
    future = controller.submit(SearchFilters())

    assert controller.state is LoadingState.LOADING
    assert controller.is_loading

    provider.gate.set()
    assert future.result(timeout=5) == jobs
    assert controller.state is LoadingState.SUCCESS


def test_latest_search_wins_over_slow_older_one():
    provider = FakeProvider([make_job("old")])
    gate = threading.Event()
    provider.gate = gate
    c = SearchController(provider, timeout=5)
    try:
        first = c.submit(SearchFilters(job_title="first"))
        provider.wait_for_calls(1)

        provider.gate = None
        provider.jobs = [make_job("new")]
        c.submit(SearchFilters(job_title="second")).result(timeout=5)
        assert [j.id for j in c.jobs] == ["new"]

        gate.set()
        assert [j.id for j in first.result(timeout=5)] == ["old"]
    finally:
        c.close(wait=True)

    assert [j.id for j in c.jobs] == ["new"]
    assert c.state is LoadingState.SUCCESS
    assert c.last_filters == SearchFilters(job_title="second")


def test_stale_failure_does_not_override_newer_success():
    provider = FakeProvider([make_job("ok")], error=ProviderError("late failure"))
    gate = threading.Event()
    provider.gate = gate
    c = SearchController(provider, timeout=5)
    try:
        first = c.submit(SearchFilters())
        provider.wait_for_calls(1)

        provider.gate = None
        provider.error = None
        c.search(SearchFilters())

        gate.set()
        assert first.result(timeout=5) == []
    finally:
        c.close(wait=True)

    assert c.state is LoadingState.SUCCESS
    assert c.error is None
    assert [j.id for j in c.jobs] == ["ok"]


def test_timeout_is_an_error_and_late_answer_is_ignored(provider):
    gate = threading.Event()
    provider.gate = gate
    c = SearchController(provider, timeout=0.05)
    try:
        assert c.search(SearchFilters()) == []
        assert c.state is LoadingState.ERROR
        assert c.error == DEFAULT_ERROR_MESSAGE
    finally:
        gate.set()
        c.close(wait=True)

    assert c.state is LoadingState.ERROR
    assert c.jobs == ()


def test_timeout_comes_from_env(provider, monkeypatch):
    monkeypatch.setenv("JOBHUB_SEARCH_TIMEOUT", "12.5")
    c = SearchController(provider)
    try:
        assert c.timeout == 12.5
    finally:
        c.close()
