import threading
import time
from typing import NamedTuple


class RateDecision(NamedTuple):
    allowed: bool
    retry_after: int


class InMemoryRateLimiter:
    """
    Fixed-window counter keyed by caller + route.
    State lives in process memory, so limits are per API worker.
    """

    def __init__(self, clock=time.monotonic) -> None:
        self._clock = clock
        self._lock = threading.Lock()
        self._windows: dict[str, tuple[int, float]] = {}

    def hit(self, key: str, limit: int, window_seconds: int = 60) -> RateDecision:
        now = self._clock()
        with self._lock:
            count, started = self._windows.get(key, (0, now))
            if now - started >= window_seconds:
                count, started = 0, now
            if count >= limit:
                return RateDecision(False, max(1, int(window_seconds - (now - started))))
            self._windows[key] = (count + 1, started)
            return RateDecision(True, 0)

    def reset(self) -> None:
        with self._lock:
            self._windows.clear()


rate_limiter = InMemoryRateLimiter()
