"""
Fixed window rate limiter shared by every proxy caller
"""
import threading
import time
from typing import Callable, Dict

from api_config import PROXY_CONFIG


def current_time_ms() -> int:
    """Wall clock in milliseconds"""
    return int(time.time() * 1000)


class FixedWindowRateLimiter:
    """Count requests in a fixed wall-clock window and reject the excess.

    The window is reset lazily on the first call that arrives at least
    ``window_duration`` ms after ``window_start``; there is no timer. Because
    the window is fixed rather than sliding, a burst around a boundary can be
    admitted up to ``2 * max_requests`` times in a short span.
    """

    def __init__(self, max_requests: int = None, window_duration: int = None,
                 clock: Callable[[], int] = current_time_ms):
        self.max_requests = max_requests if max_requests is not None else PROXY_CONFIG['max_requests_per_minute']
        self.window_duration = window_duration if window_duration is not None else PROXY_CONFIG['rate_limit_window']
        self._clock = clock

        self.count = 0
        self.window_start = clock()
        self._lock = threading.Lock()

    def _maybe_reset(self, now: int):
        if now - self.window_start >= self.window_duration:
            self.count = 0
            self.window_start = now

    def admit(self) -> bool:
        """Return True to allow the request, False to reject it"""
        with self._lock:
            now = self._clock()
            self._maybe_reset(now)

            if self.count >= self.max_requests:
                return False

            self.count += 1
            return True

    def get_status(self) -> Dict:
        """Current window usage (read only, does not reset the window)"""
        with self._lock:
            now = self._clock()
            elapsed = now - self.window_start
            if elapsed >= self.window_duration:
                count, reset_in = 0, 0
            else:
                count, reset_in = self.count, self.window_duration - elapsed

            return {
                'current_count': count,
                'limit': self.max_requests,
                'remaining': max(0, self.max_requests - count),
                'window_duration_ms': self.window_duration,
                'reset_in_ms': reset_in,
            }
