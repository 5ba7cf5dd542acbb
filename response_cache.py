"""
In-memory cache for upstream responses, keyed by endpoint and query
"""
import copy
import threading
from typing import Any, Callable, Dict, Optional
from urllib.parse import urlencode

from api_config import PROXY_CONFIG
from rate_limiter import current_time_ms


def make_cache_key(endpoint_path: str, query_params: Dict[str, str]) -> str:
    """Build a cache key that does not depend on parameter insertion order"""
    query = urlencode(sorted((query_params or {}).items()))
    return f"{endpoint_path}?{query}"


class ResponseCache:
    """One entry per key: {'data': payload, 'timestamp': stored_at_ms}.

    Entries are overwritten on refresh and never evicted; staleness is only
    checked when an entry is read.
    """

    def __init__(self, cache_duration: int = None, clock: Callable[[], int] = current_time_ms):
        self.cache_duration = cache_duration if cache_duration is not None else PROXY_CONFIG['cache_duration']
        self._clock = clock
        self._entries = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[Dict]:
        """Return a copy of the entry if it is still fresh, else None"""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if self._clock() - entry['timestamp'] < self.cache_duration:
                return {
                    'data': copy.deepcopy(entry['data']),
                    'timestamp': entry['timestamp'],
                }
            return None

    def set(self, key: str, data: Any):
        with self._lock:
            self._entries[key] = {
                'data': copy.deepcopy(data),
                'timestamp': self._clock(),
            }

    def __contains__(self, key: str) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def get_stats(self) -> Dict:
        now = self._clock()
        with self._lock:
            fresh = sum(1 for e in self._entries.values() if now - e['timestamp'] < self.cache_duration)
            return {
                'entries': len(self._entries),
                'fresh_entries': fresh,
                'cache_duration_ms': self.cache_duration,
            }
