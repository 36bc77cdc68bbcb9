"""Minimum-interval throttle for outbound LLM calls."""

from __future__ import annotations

import threading
import time
from collections.abc import Callable


class RateLimiter:
    """Depth-1 leaky bucket: successive ``acquire`` calls are spaced by ``min_interval``.

    The lock is held while waiting, so concurrent callers in the same process
    are serialised.  Create one per app (or per test) and pass it to every
    call site that needs throttling.
    """

    def __init__(
        self,
        min_interval: float,
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if min_interval < 0:
            raise ValueError("min_interval must be non-negative")
        self.min_interval = min_interval
        self._clock = clock
        self._sleep = sleep
        self._lock = threading.Lock()
        self._last_call: float | None = None

    def acquire(self) -> float:
        """Block until a call is allowed; return the number of seconds waited."""
        with self._lock:
            waited = 0.0
            now = self._clock()
            if self._last_call is not None:
                wait = self._last_call + self.min_interval - now
                if wait > 0:
                    self._sleep(wait)
                    waited = wait
                    now = self._clock()
            self._last_call = now
            return waited
