"""
API Configuration for the market data proxy (rate limiting, caching, upstream)
"""
import os

from dotenv import load_dotenv

# Proxy behaviour (all durations in milliseconds)
PROXY_CONFIG = {
    # Cache settings
    'cache_duration': 60000,  # 1 minute

    # Rate limiting settings
    'rate_limit_window': 60000,  # 1 minute
    'max_requests_per_minute': 30,  # shared by every caller

    # Upstream header carrying the API key
    'api_key_header': 'X-CMC_PRO_API_KEY',
}

# API Error handling
ERROR_CONFIG = {
    'rate_limit_message': 'Rate limit exceeded. Please try again later.',
    'default_error_message': 'Internal server error',
    'default_error_status': 500,
}

REQUIRED_SETTINGS = ['COINMARKETCAP_BASE_URL', 'COINMARKETCAP_API_KEY']


class ConfigurationMissing(Exception):
    """Raised at startup when a required upstream setting is absent"""

    def __init__(self, missing):
        self.missing = list(missing)
        super().__init__(f"Missing required configuration: {', '.join(self.missing)}")


def load_config(env_file: str = None) -> dict:
    """Read server and upstream settings from the environment (and .env)"""
    load_dotenv(env_file)

    timeout = os.environ.get('COINMARKETCAP_TIMEOUT')

    return {
        'host': os.environ.get('HOST', '0.0.0.0'),
        'port': int(os.environ.get('PORT', 5000)),
        'base_url': os.environ.get('COINMARKETCAP_BASE_URL', ''),
        'api_key': os.environ.get('COINMARKETCAP_API_KEY', ''),
        'timeout': float(timeout) if timeout else None,
        'cors_origin': os.environ.get('CORS_ORIGIN', 'http://localhost:3000'),
        'log_level': os.environ.get('LOG_LEVEL', 'INFO'),
        'log_file': os.environ.get('LOG_FILE') or None,
    }


def validate_config(config: dict):
    """Raise ConfigurationMissing if the upstream base URL or key is empty"""
    keys = {'COINMARKETCAP_BASE_URL': 'base_url', 'COINMARKETCAP_API_KEY': 'api_key'}
    missing = [name for name in REQUIRED_SETTINGS if not config.get(keys[name])]
    if missing:
        raise ConfigurationMissing(missing)
