"""
CoinMarketCap API client used as the proxy's upstream
"""
import logging
from typing import Any, Dict, Optional

import requests

from api_config import PROXY_CONFIG

logger = logging.getLogger(__name__)


class UpstreamError(Exception):
    """The upstream returned a non-success status or could not be reached"""

    def __init__(self, message: str, status: Optional[int] = None, body: Any = None):
        self.message = message
        self.status = status
        self.body = body
        super().__init__(message)


class CoinMarketCapClient:
    """Forward GET requests to CoinMarketCap with the API key header"""

    def __init__(self, base_url: str, api_key: str, timeout: Optional[float] = None,
                 session: requests.Session = None):
        self.base_url = base_url.rstrip('/')
        self.api_key = api_key
        self.timeout = timeout
        self.session = session or requests.Session()

    def _headers(self) -> Dict[str, str]:
        return {
            PROXY_CONFIG['api_key_header']: self.api_key,
            'Accept': 'application/json',
        }

    def get(self, endpoint_path: str, params: Dict[str, str] = None) -> Any:
        """GET <base_url><endpoint_path> and return the decoded JSON body.

        No retries are made; any failure is raised as UpstreamError carrying
        the HTTP status (None for transport errors) and the decoded error body
        when there is one.
        """
        url = f"{self.base_url}{endpoint_path}"
        logger.debug(f"GET {url} params={params}")

        try:
            response = self.session.get(
                url,
                params=params or {},
                headers=self._headers(),
                timeout=self.timeout
            )
        except requests.RequestException as e:
            raise UpstreamError(str(e)) from e

        if not response.ok:
            try:
                body = response.json()
            except ValueError:
                body = response.text
            raise UpstreamError(
                f"CoinMarketCap returned HTTP {response.status_code}",
                status=response.status_code,
                body=body
            )

        try:
            return response.json()
        except ValueError as e:
            raise UpstreamError(f"Invalid JSON from CoinMarketCap: {e}", body=response.text) from e

    def close(self):
        self.session.close()


def extract_error_message(body: Any) -> Optional[str]:
    """Pull status.error_message out of a CoinMarketCap error body"""
    if not isinstance(body, dict):
        return None
    status = body.get('status')
    if not isinstance(status, dict):
        return None
    return status.get('error_message') or None
