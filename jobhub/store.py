"""Persist the saved / applied job-id sets as JSON files with file locking."""
from __future__ import annotations

import fcntl
import json
import os
import tempfile
from pathlib import Path
from typing import Iterable

from jobhub.config import data_dir
from jobhub.log import get_logger

log = get_logger(__name__)

SAVED_KEY = "savedJobIds"
APPLIED_KEY = "appliedJobIds"


def _lock(f, exclusive: bool = True) -> None:
    """Advisory file lock (Unix fcntl)."""
    try:
        fcntl.flock(f.fileno(), fcntl.LOCK_EX if exclusive else fcntl.LOCK_SH)
    except (OSError, AttributeError):
        pass


def _unlock(f) -> None:
    try:
        fcntl.flock(f.fileno(), fcntl.LOCK_UN)
    except (OSError, AttributeError):
        pass


def toggle(ids: frozenset[str], job_id: str) -> frozenset[str]:
    """New set with ``job_id`` removed if present, otherwise added."""
    if job_id in ids:
        return ids - {job_id}
    return ids | {job_id}


class IdStore:
    """Key-value store holding one set of job ids per key."""

    def __init__(self, directory: Path | None = None) -> None:
        self.directory = directory or data_dir()

    def path_for(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def load(self, key: str) -> frozenset[str]:
        """Stored ids for ``key``; empty when absent or unreadable."""
        path = self.path_for(key)
        if not path.exists():
            return frozenset()
        try:
            with open(path, "r", encoding="utf-8") as f:
                _lock(f, exclusive=False)
                try:
                    raw = json.load(f)
                finally:
                    _unlock(f)
        except (OSError, ValueError) as exc:
            log.debug("Ignoring unreadable %s: %s", path.name, exc)
            return frozenset()

        if not isinstance(raw, list) or not all(isinstance(i, str) for i in raw):
            log.debug("Ignoring malformed %s", path.name)
            return frozenset()
        return frozenset(raw)

    def save(self, key: str, ids: Iterable[str]) -> bool:
        """Write ``ids`` for ``key``. Failures are logged, never raised."""
        path = self.path_for(key)
        ordered = sorted(ids)
        payload = json.dumps(ordered, ensure_ascii=False)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(dir=self.directory, prefix=f".{key}.", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    _lock(f)
                    f.write(payload + "\n")
                    f.flush()
                    os.fsync(f.fileno())
                    _unlock(f)
                os.replace(tmp, path)
            except OSError:
                Path(tmp).unlink(missing_ok=True)
                raise
        except OSError as exc:
            log.warning("Could not persist %s: %s", key, exc)
            return False
        log.debug("Persisted %d id(s) → %s", len(ordered), path.name)
        return True

    def clear(self, key: str) -> None:
        try:
            self.path_for(key).unlink(missing_ok=True)
        except OSError as exc:
            log.warning("Could not clear %s: %s", key, exc)
