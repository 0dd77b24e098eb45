"""Per-platform call spacing.

Codeforces rejects bursts with "Call limit exceeded" and asks clients to make
at most one call every two seconds. Every client of a platform shares one
limiter, whose interval comes from ``CODEFORCES_RATE_LIMIT``.
"""
import threading
import time


class RateLimiter:
    """Hands out call slots at least ``min_interval`` seconds apart."""

    def __init__(self, min_interval: float = 2.0):
        self.min_interval = max(0.0, float(min_interval))
        self._next_slot = 0.0
        self._lock = threading.Lock()

    def wait(self) -> float:
        """Block until this caller's slot. Returns the seconds slept."""
        with self._lock:
            now = time.monotonic()
            slot = max(now, self._next_slot)
            self._next_slot = slot + self.min_interval
        delay = slot - now
        if delay > 0:
            time.sleep(delay)
        return delay


_limiters: dict[str, RateLimiter] = {}
_limiters_lock = threading.Lock()


def get_platform_limiter(platform: str, min_interval: float = 2.0) -> RateLimiter:
    """Shared limiter for ``platform``; an existing one takes the new interval."""
    with _limiters_lock:
        limiter = _limiters.get(platform)
        if limiter is None:
            limiter = _limiters[platform] = RateLimiter(min_interval)
        else:
            limiter.min_interval = max(0.0, float(min_interval))
        return limiter
