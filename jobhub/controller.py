"""
Search lifecycle controller.

Runs one provider call per search on a worker thread and tracks
idle → loading → success / error. Every search gets a sequence number and
only the most recently issued one may change the state, so a slow
response from an older search can never overwrite a newer result.
"""
from __future__ import annotations

import threading
from concurrent.futures import Future, ThreadPoolExecutor, TimeoutError as FutureTimeout

from jobhub import config
from jobhub.log import get_logger
from jobhub.models import Job, LoadingState, SearchFilters
from jobhub.providers.base import JobProvider

log = get_logger(__name__)


class SearchController:
    def __init__(
        self,
        provider: JobProvider,
        *,
        timeout: float | None = None,
        error_message: str | None = None,
        max_workers: int = 4,
    ) -> None:
        self.provider = provider
        self.timeout = timeout if timeout is not None else config.search_timeout()
        self.error_message = error_message or config.error_message()
        self._pool = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="jobhub-search")
        self._lock = threading.Lock()
        self._seq = 0
        self._state = LoadingState.IDLE
        self._jobs: tuple[Job, ...] = ()
        self._error: str | None = None
        self._last_filters: SearchFilters | None = None

    # ── read-only state ─────────────────────────────────────────────────

    @property
    def state(self) -> LoadingState:
        return self._state

    @property
    def jobs(self) -> tuple[Job, ...]:
        return self._jobs

    @property
    def error(self) -> str | None:
        return self._error

    @property
    def last_filters(self) -> SearchFilters | None:
        return self._last_filters

    @property
    def is_loading(self) -> bool:
        return self._state is LoadingState.LOADING

    # ── operations ──────────────────────────────────────────────────────

    def submit(self, filters: SearchFilters) -> Future:
        """Start a search without waiting; the future resolves to its jobs."""
        _, future = self._start(filters)
        return future

    def search(self, filters: SearchFilters) -> list[Job]:
        """Run a search and wait for it. Provider failures never raise here."""
        seq, future = self._start(filters)
        try:
            return future.result(timeout=self.timeout)
        except FutureTimeout:
            log.error("Search #%d timed out after %.0fs", seq, self.timeout)
            self._expire(seq)
            return []

    def retry(self) -> list[Job]:
        """Repeat the last search with the same filters."""
        return self.search(self._last_filters or SearchFilters())

    def close(self, wait: bool = False) -> None:
        self._pool.shutdown(wait=wait, cancel_futures=not wait)

    # ── internals ───────────────────────────────────────────────────────

    def _start(self, filters: SearchFilters) -> tuple[int, Future]:
        with self._lock:
            self._seq += 1
            seq = self._seq
            self._state = LoadingState.LOADING
            self._error = None
            self._last_filters = filters
        log.info("Search #%d started via %s: %s", seq, self.provider.name, filters.to_dict())
        return seq, self._pool.submit(self._run, seq, filters)

    def _run(self, seq: int, filters: SearchFilters) -> list[Job]:
        try:
            jobs = list(self.provider.fetch_jobs(filters))
        except Exception as exc:
            log.error("Search #%d failed: %s: %s", seq, type(exc).__name__, exc)
            self._fail(seq)
            return []

        with self._lock:
            if seq != self._seq:
                log.debug("Dropping stale result of search #%d (latest is #%d)", seq, self._seq)
                return jobs
            self._jobs = tuple(jobs)
            self._state = LoadingState.SUCCESS
        log.info("Search #%d returned %d job(s)", seq, len(jobs))
        return jobs

    def _fail(self, seq: int) -> None:
        with self._lock:
            if seq != self._seq:
                log.debug("Ignoring failure of stale search #%d", seq)
                return
            self._jobs = ()
            self._error = self.error_message
            self._state = LoadingState.ERROR

    def _expire(self, seq: int) -> None:
        with self._lock:
            if seq != self._seq:
                return
            # Invalidate the request so its late answer is discarded.
            self._seq += 1
            self._jobs = ()
            self._error = self.error_message
            self._state = LoadingState.ERROR
