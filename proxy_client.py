"""
Client for calling the market data proxy from Python code
"""
from typing import Any, Dict

import requests

from api_config import ERROR_CONFIG

DEFAULT_PROXY_URL = 'http://localhost:5000/api/crypto'

# Trading pairs shown in the frontend mapped to CoinMarketCap symbols
COIN_SYMBOL_MAP = {
    'BTC/USDT': 'BTC',
    'ETH/USDT': 'ETH',
    'BNB/USDT': 'BNB'
}


class RateLimitExceeded(Exception):
    """The proxy answered 429"""

    def __init__(self, message: str = ERROR_CONFIG['rate_limit_message']):
        super().__init__(message)


class ProxyClient:
    """Make API requests through the proxy server"""

    def __init__(self, base_url: str = DEFAULT_PROXY_URL, timeout: float = 10,
                 session: requests.Session = None):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = session or requests.Session()

    def get(self, endpoint: str, params: Dict[str, str] = None) -> Any:
        response = self.session.get(
            f"{self.base_url}{endpoint}",
            params=params or {},
            timeout=self.timeout
        )

        if response.status_code == 429:
            raise RateLimitExceeded()

        response.raise_for_status()
        return response.json()

    def get_latest_quotes(self, symbols, convert: str = 'USD') -> Any:
        """Shortcut for /cryptocurrency/quotes/latest"""
        if isinstance(symbols, str):
            symbols = [symbols]
        symbols = ','.join(COIN_SYMBOL_MAP.get(s, s) for s in symbols)
        return self.get('/cryptocurrency/quotes/latest', {'symbol': symbols, 'convert': convert})
