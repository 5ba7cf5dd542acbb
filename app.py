import logging

from flask import Flask, request, jsonify
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from api_config import ERROR_CONFIG, load_config
from coinmarketcap_client import CoinMarketCapClient
from gateway import CachingGateway

logger = logging.getLogger(__name__)


def create_app(config: dict = None, gateway: CachingGateway = None) -> Flask:
    """Build the proxy app around a single CachingGateway instance"""
    config = config or load_config()

    if gateway is None:
        upstream = CoinMarketCapClient(
            base_url=config['base_url'],
            api_key=config['api_key'],
            timeout=config.get('timeout')
        )
        gateway = CachingGateway(upstream)

    app = Flask(__name__)

    # Only the frontend origin may call the proxy, and only with GET
    CORS(app, origins=[config['cors_origin']], methods=['GET'])

    app.config['PROXY_CONFIG'] = config
    app.extensions['gateway'] = gateway

    @app.route('/api/crypto/', defaults={'endpoint': ''}, methods=['GET'])
    @app.route('/api/crypto/<path:endpoint>', methods=['GET'])
    def proxy_crypto(endpoint):
        result = gateway.handle('/' + endpoint, request.args.to_dict())
        return jsonify(result.body), result.status

    @app.route('/api/proxy/status', methods=['GET'])
    def get_proxy_status():
        """Rate window, cache and outcome counters"""
        return jsonify(gateway.get_status())

    @app.errorhandler(Exception)
    def handle_unexpected_error(e):
        # 404/405 and friends keep their own status
        if isinstance(e, HTTPException):
            return e
        logger.exception(f"Unhandled error for {request.path}")
        return jsonify({'error': ERROR_CONFIG['default_error_message']}), ERROR_CONFIG['default_error_status']

    return app


if __name__ == '__main__':
    from start import main
    main()
