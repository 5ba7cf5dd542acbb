"""
Logging setup and request outcome tracking for the market data proxy
"""
import logging
import threading
from datetime import datetime
from typing import Dict, List

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

OUTCOMES = ('cache_hit', 'fetched', 'rate_limited', 'upstream_error')


def configure_logging(level: str = 'INFO', log_file: str = None):
    """Configure structured logging for the proxy process"""
    handlers = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=handlers
    )
    logger.debug(f"Logging configured at {level.upper()}")


class ProxyMonitor:
    """Counts gateway outcomes and keeps the most recent upstream errors"""

    def __init__(self, max_errors: int = 100):
        self.started_at = datetime.now()
        self.counters = {outcome: 0 for outcome in OUTCOMES}
        self.recent_errors = []
        self.max_errors = max_errors
        self._lock = threading.Lock()

    def record(self, outcome: str, endpoint: str, status: int = None, message: str = None):
        with self._lock:
            self.counters[outcome] = self.counters.get(outcome, 0) + 1

            if outcome == 'upstream_error':
                self.recent_errors.append({
                    'timestamp': datetime.now().isoformat(),
                    'endpoint': endpoint,
                    'status': status,
                    'message': message
                })
                # Keep only the last max_errors entries
                if len(self.recent_errors) > self.max_errors:
                    self.recent_errors = self.recent_errors[-self.max_errors:]

    def get_recent_errors(self, limit: int = 10) -> List[Dict]:
        with self._lock:
            return self.recent_errors[-limit:]

    def get_stats(self) -> Dict:
        with self._lock:
            counters = dict(self.counters)
        total = sum(counters.values())
        served = counters['cache_hit'] + counters['fetched']
        return {
            'total_requests': total,
            'outcomes': counters,
            'cache_hit_rate': counters['cache_hit'] / served * 100 if served else 0,
            'recent_errors': self.get_recent_errors(),
            'uptime_seconds': int((datetime.now() - self.started_at).total_seconds()),
            'last_updated': datetime.now().isoformat()
        }
