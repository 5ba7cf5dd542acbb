"""
Shared fixtures for the proxy tests
"""
import pytest

from coinmarketcap_client import UpstreamError
from gateway import CachingGateway
from monitoring import ProxyMonitor
from rate_limiter import FixedWindowRateLimiter
from response_cache import ResponseCache


class FakeClock:
    """Millisecond clock that only moves when told to"""

    def __init__(self, now: int = 0):
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int):
        self.now += ms


class StubUpstream:
    """Records calls and replays queued payloads or errors"""

    def __init__(self, payload=None):
        self.payload = payload if payload is not None else {'data': {}}
        self.error = None
        self.calls = []

    def get(self, endpoint_path, params=None):
        self.calls.append((endpoint_path, dict(params or {})))
        if self.error is not None:
            raise self.error
        return self.payload

    def fail_with(self, status=None, body=None, message='upstream failed'):
        self.error = UpstreamError(message, status=status, body=body)

    def recover(self, payload=None):
        self.error = None
        if payload is not None:
            self.payload = payload


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def upstream():
    return StubUpstream()


@pytest.fixture
def gateway(clock, upstream):
    """Gateway with default limits (30 per 60s, 60s freshness) on a fake clock"""
    return CachingGateway(
        upstream,
        rate_limiter=FixedWindowRateLimiter(clock=clock),
        cache=ResponseCache(clock=clock),
        monitor=ProxyMonitor(),
        clock=clock
    )
