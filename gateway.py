"""
Caching gateway: rate limit, cache lookup, then forward to CoinMarketCap
"""
import logging
from typing import Any, Callable, Dict, NamedTuple

from api_config import ERROR_CONFIG
from coinmarketcap_client import UpstreamError, extract_error_message
from monitoring import ProxyMonitor
from rate_limiter import FixedWindowRateLimiter, current_time_ms
from response_cache import ResponseCache, make_cache_key

logger = logging.getLogger(__name__)


class GatewayResponse(NamedTuple):
    status: int
    body: Any
    outcome: str  # cache_hit, fetched, rate_limited or upstream_error


class CachingGateway:
    """Owns the rate window and the response cache for one proxy process.

    ``upstream`` is anything with ``get(endpoint_path, params)`` that returns
    the decoded payload or raises UpstreamError. Build one instance at startup
    and hand it to the request handlers.
    """

    def __init__(self, upstream, rate_limiter: FixedWindowRateLimiter = None,
                 cache: ResponseCache = None, monitor: ProxyMonitor = None,
                 clock: Callable[[], int] = current_time_ms):
        self.upstream = upstream
        self.rate_limiter = rate_limiter or FixedWindowRateLimiter(clock=clock)
        self.cache = cache or ResponseCache(clock=clock)
        self.monitor = monitor or ProxyMonitor()

    def handle(self, endpoint_path: str, query_params: Dict[str, str] = None) -> GatewayResponse:
        query_params = dict(query_params or {})

        if not self.rate_limiter.admit():
            logger.warning(f"Rate limit exceeded, rejecting {endpoint_path}")
            self.monitor.record('rate_limited', endpoint_path)
            return GatewayResponse(429, {'error': ERROR_CONFIG['rate_limit_message']}, 'rate_limited')

        cache_key = make_cache_key(endpoint_path, query_params)

        entry = self.cache.get(cache_key)
        if entry is not None:
            logger.debug(f"Cache hit for {cache_key}")
            self.monitor.record('cache_hit', endpoint_path)
            return GatewayResponse(200, entry['data'], 'cache_hit')

        try:
            data = self.upstream.get(endpoint_path, query_params)
        except UpstreamError as e:
            return self._upstream_failure(endpoint_path, e)

        self.cache.set(cache_key, data)
        self.monitor.record('fetched', endpoint_path)
        return GatewayResponse(200, data, 'fetched')

    def _upstream_failure(self, endpoint_path: str, error: UpstreamError) -> GatewayResponse:
        logger.error(f"Proxy error for {endpoint_path}: {error.body if error.body is not None else error.message}")

        status = error.status or ERROR_CONFIG['default_error_status']
        message = extract_error_message(error.body) or ERROR_CONFIG['default_error_message']

        self.monitor.record('upstream_error', endpoint_path, status=status, message=message)
        return GatewayResponse(status, {'error': message}, 'upstream_error')

    def get_status(self) -> Dict:
        return {
            'rate_limit': self.rate_limiter.get_status(),
            'cache': self.cache.get_stats(),
            'requests': self.monitor.get_stats(),
        }
