#!/usr/bin/env python3
"""
Safe startup script for the market data proxy
"""
import sys


def check_dependencies():
    """Check if all required dependencies are available"""
    print("[INFO] Checking dependencies...")

    required_modules = [
        'flask',
        'flask_cors',
        'requests',
        'dotenv'
    ]

    missing_required = []

    for module in required_modules:
        try:
            __import__(module)
            print(f"  [OK] {module}")
        except ImportError:
            missing_required.append(module)
            print(f"  [MISSING] {module} (required)")

    if missing_required:
        print(f"\n[ERROR] Missing required dependencies: {', '.join(missing_required)}")
        print("Please install them with: pip install -e .")
        return False

    return True


def check_configuration(config):
    """Make sure the upstream base URL and API key are set"""
    from api_config import ConfigurationMissing, validate_config

    print("\n[INFO] Checking configuration...")

    try:
        validate_config(config)
    except ConfigurationMissing as e:
        print(f"[ERROR] {e}")
        print("Set them in the environment or in a .env file next to this script.")
        return False

    print(f"  [OK] Upstream: {config['base_url']}")
    print(f"  [OK] CORS origin: {config['cors_origin']}")
    return True


def start_application(config):
    """Start the Flask application with error handling"""
    print("\n[INFO] Starting market data proxy...")

    try:
        from app import create_app

        app = create_app(config)

        print("\n" + "=" * 60)
        print(f"Proxy server running on port {config['port']}")
        print(f"Proxy endpoint: http://localhost:{config['port']}/api/crypto/<endpoint>")
        print("=" * 60 + "\n")

        app.run(
            debug=False,
            host=config['host'],
            port=config['port'],
            use_reloader=False,
            threaded=True
        )

    except KeyboardInterrupt:
        print("\n\n[INFO] Shutting down gracefully...")
        sys.exit(0)

    except Exception as e:
        print(f"\n[ERROR] Application startup failed: {e}")
        print(f"Check if port {config['port']} is available")
        sys.exit(1)


def main():
    """Main startup function"""
    print("Market Data Proxy Startup")
    print("=" * 40)

    if not check_dependencies():
        sys.exit(1)

    from api_config import load_config
    from monitoring import configure_logging

    config = load_config()
    configure_logging(config['log_level'], config['log_file'])

    if not check_configuration(config):
        sys.exit(1)

    start_application(config)


if __name__ == "__main__":
    main()
