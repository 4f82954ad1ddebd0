"""
One user's job-search session.

Holds the current filters and the saved / applied id sets, drives the
search controller and exposes the derived job lists to the UI and CLI.
Toggling save / apply persists immediately and never starts a search.
"""
from __future__ import annotations

from typing import Any

from jobhub.config import get_env
from jobhub.controller import SearchController
from jobhub.log import get_logger
from jobhub.models import Job, LoadingState, SearchFilters
from jobhub.providers import JobProvider, get_provider
from jobhub.store import APPLIED_KEY, SAVED_KEY, IdStore, toggle
from jobhub.views import JobViews, build_views

log = get_logger(__name__)


class JobHubSession:
    def __init__(
        self,
        provider: JobProvider | None = None,
        store: IdStore | None = None,
        *,
        filters: SearchFilters | None = None,
        timeout: float | None = None,
    ) -> None:
        self.store = store or IdStore()
        self.controller = SearchController(provider or get_provider(get_env), timeout=timeout)
        self._filters = filters or SearchFilters()
        self._saved_ids = self.store.load(SAVED_KEY)
        self._applied_ids = self.store.load(APPLIED_KEY)
        self._started = False
        log.debug(
            "Session ready: %d saved, %d applied",
            len(self._saved_ids), len(self._applied_ids),
        )

    # ── filters ─────────────────────────────────────────────────────────

    @property
    def filters(self) -> SearchFilters:
        return self._filters

    def set_filters(self, filters: SearchFilters) -> None:
        self._filters = filters

    def update_filters(self, **changes: Any) -> SearchFilters:
        self._filters = self._filters.with_changes(**changes)
        return self._filters

    # ── search lifecycle ────────────────────────────────────────────────

    @property
    def state(self) -> LoadingState:
        return self.controller.state

    @property
    def error(self) -> str | None:
        return self.controller.error

    @property
    def started(self) -> bool:
        return self._started

    def start(self) -> list[Job] | None:
        """Initial search with whatever filters are set; runs once per session."""
        if self._started:
            return None
        self._started = True
        return self.search()

    def search(self) -> list[Job]:
        return self.controller.search(self._filters)

    def retry(self) -> list[Job]:
        """Search again after a failure, with the filters as they are now."""
        return self.controller.search(self._filters)

    # ── saved / applied ─────────────────────────────────────────────────

    @property
    def saved_ids(self) -> frozenset[str]:
        return self._saved_ids

    @property
    def applied_ids(self) -> frozenset[str]:
        return self._applied_ids

    def is_saved(self, job_id: str) -> bool:
        return job_id in self._saved_ids

    def is_applied(self, job_id: str) -> bool:
        return job_id in self._applied_ids

    def toggle_save(self, job_id: str) -> bool:
        """Flip the saved flag; returns the new value."""
        self._saved_ids = toggle(self._saved_ids, job_id)
        self.store.save(SAVED_KEY, self._saved_ids)
        return job_id in self._saved_ids

    def toggle_apply(self, job_id: str) -> bool:
        """Flip the applied flag; returns the new value."""
        self._applied_ids = toggle(self._applied_ids, job_id)
        self.store.save(APPLIED_KEY, self._applied_ids)
        return job_id in self._applied_ids

    def reset_history(self) -> None:
        self._saved_ids = frozenset()
        self._applied_ids = frozenset()
        self.store.clear(SAVED_KEY)
        self.store.clear(APPLIED_KEY)
        log.info("Cleared saved and applied job history")

    # ── derived ─────────────────────────────────────────────────────────

    @property
    def views(self) -> JobViews:
        return build_views(self.controller.jobs, self._saved_ids, self._applied_ids)

    def close(self) -> None:
        self.controller.close()
