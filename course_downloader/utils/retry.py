"""
Generic retry-with-backoff helper.

Each failed attempt waits ``delay * backoff ** attempt`` seconds, spread by
``±jitter`` so that parallel callers do not retry in lock-step.
"""

from __future__ import annotations

import random
import time
from typing import Callable, TypeVar

from course_downloader.utils.log import log

T = TypeVar("T")


def backoff_delay(attempt: int, delay: float, backoff: float, jitter: float = 0.0) -> float:
    """Seconds to sleep after failed attempt number *attempt* (0-based)."""
    ideal = delay * (backoff ** attempt)
    if jitter:
        ideal *= random.uniform(1.0 - jitter, 1.0 + jitter)
    return max(0.0, ideal)


def retry(
    fn: Callable[[], T],
    attempts: int = 3,
    delay: float = 1.0,
    backoff: float = 2.0,
    jitter: float = 0.0,
    exceptions: tuple[type[BaseException], ...] = (Exception,),
    sleep: Callable[[float], None] = time.sleep,
) -> T:
    """Call *fn* until it succeeds, at most *attempts* times.

    Only *exceptions* trigger another attempt; the last one is re-raised
    once the attempts are exhausted.
    """
    if attempts < 1:
        raise ValueError("attempts must be >= 1")

    for attempt in range(attempts):
        try:
            return fn()
        except exceptions as exc:
            if attempt + 1 >= attempts:
                log.debug("[RETRY] giving up after %d attempt(s): %s", attempts, exc)
                raise
            wait = backoff_delay(attempt, delay, backoff, jitter)
            log.warning(
                "[RETRY] attempt %d/%d failed (%s) – retrying in %.1f s",
                attempt + 1, attempts, exc, wait,
            )
            sleep(wait)

    raise AssertionError("unreachable")
