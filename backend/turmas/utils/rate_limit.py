from collections import defaultdict, deque
from collections.abc import Callable
from datetime import UTC, datetime, timedelta


def _utcnow() -> datetime:
    return datetime.now(UTC)


class SimpleRateLimiter:
    """In-process sliding window limiter keyed by client (one bucket per key)."""

    def __init__(self, max_requests: int, window_seconds: int, clock: Callable[[], datetime] = _utcnow):
        self.max_requests = max_requests
        self.window = timedelta(seconds=window_seconds)
        self._clock = clock
        self._storage: dict[str, deque[datetime]] = defaultdict(deque)

    def _prune(self, key: str, now: datetime) -> deque[datetime]:
        bucket = self._storage[key]
        while bucket and now - bucket[0] > self.window:
            bucket.popleft()
        return bucket

    def hit(self, key: str) -> bool:
        now = self._clock()
        bucket = self._prune(key, now)
        if len(bucket) >= self.max_requests:
            return False

        bucket.append(now)
        return True

    def reset(self, key: str | None = None) -> None:
        if key is None:
            self._storage.clear()
            return
        self._storage.pop(key, None)
