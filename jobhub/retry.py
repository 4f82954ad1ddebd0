"""Backoff retry for provider transport calls."""
from __future__ import annotations

import functools
import random
import time
from typing import Any, Callable, Iterator, Tuple, Type

from jobhub.log import get_logger

log = get_logger(__name__)


def backoff_delays(
    attempts: int,
    base_delay: float = 1.0,
    max_delay: float = 20.0,
    jitter: bool = True,
) -> Iterator[float]:
    """Delays to sleep between ``attempts`` tries (one fewer than attempts)."""
    for n in range(attempts - 1):
        delay = min(base_delay * (2 ** n), max_delay)
        if jitter:
            delay *= 0.5 + random.random()
        yield delay


def retry(
    *,
    max_attempts: int = 3,
    base_delay: float = 1.0,
    max_delay: float = 20.0,
    jitter: bool = True,
    retryable: Tuple[Type[BaseException], ...] = (OSError,),
    sleep: Callable[[float], None] | None = None,
) -> Callable:
    """Retry the wrapped call on ``retryable`` errors; the last error is re-raised."""

    def decorator(fn: Callable) -> Callable:
        @functools.wraps(fn)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            delays = backoff_delays(max_attempts, base_delay, max_delay, jitter)
            attempt = 1
            while True:
                try:
                    return fn(*args, **kwargs)
                except retryable as exc:
                    delay = next(delays, None)
                    if delay is None:
                        log.error("%s gave up after %d attempts: %s", fn.__qualname__, attempt, exc)
                        raise
                    log.warning(
                        "%s attempt %d/%d failed (%s), retrying in %.1fs",
                        fn.__qualname__, attempt, max_attempts, exc, delay,
                    )
                    (sleep or time.sleep)(delay)
                    attempt += 1

        return wrapper

    return decorator
