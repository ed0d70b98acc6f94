"""
TrainingCycle - Flask Application
"""

import logging
import os
import sys

from dotenv import load_dotenv
from flask import Flask, request, jsonify
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_talisman import Talisman
from werkzeug.middleware.proxy_fix import ProxyFix

# Load environment variables from .env file
load_dotenv()

from . import config
from .datasource import get_data_source
from .routes import bp


def create_app(config_overrides=None, data_source=None):
    """Create and configure the Flask application"""
    app = Flask(__name__)
    app.config.update(config_overrides or {})

    logging.basicConfig(
        level=getattr(logging, config.LOG_LEVEL, logging.INFO),
        format='%(asctime)s %(levelname)s [%(name)s] %(message)s'
    )

    # SECRET_KEY must be set via environment variable - no default fallback
    if not app.config.get('TESTING'):
        secret_key = os.environ.get('SECRET_KEY', '').strip()
        if not secret_key:
            raise RuntimeError(
                "SECRET_KEY environment variable must be set. "
                "Generate a secure key with: python -c 'import secrets; print(secrets.token_hex(32))'"
            )
        if len(secret_key) < 32:
            raise RuntimeError(
                f"SECRET_KEY must be at least 32 characters. Current length: {len(secret_key)}."
            )
        app.config['SECRET_KEY'] = secret_key
    app.config['JSON_AS_ASCII'] = False
    app.config['MAX_CONTENT_LENGTH'] = 4 * 1024 * 1024  # 4MB max payload

    is_production = os.environ.get('FLASK_ENV') == 'production'

    # Security: rate limiting
    app.config.setdefault('RATELIMIT_ENABLED', not app.config.get('TESTING', False))
    limiter = Limiter(
        key_func=get_remote_address,
        app=app,
        default_limits=config.RATELIMIT_DEFAULTS,
        storage_uri="memory://"
    )
    app.extensions['limiter'] = limiter
    app.logger.info("Rate limiting enabled")

    # Security: response headers
    Talisman(
        app,
        force_https=is_production,
        strict_transport_security=is_production,
        strict_transport_security_max_age=31536000,
        content_security_policy={'default-src': "'none'"},
        frame_options='DENY',
        referrer_policy='strict-origin-when-cross-origin'
    )
    app.logger.info("Security headers enabled")

    # Security: Handle reverse proxy headers (X-Forwarded-*)
    num_proxies = int(os.environ.get('PROXY_FIX_NUM_PROXIES', '1'))
    if num_proxies > 0:
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=num_proxies, x_proto=num_proxies, x_host=num_proxies)
        app.logger.info(f"ProxyFix enabled with {num_proxies} proxy(ies)")

    app.extensions['training_data_source'] = data_source or get_data_source()
    app.logger.info(f"Using '{app.extensions['training_data_source'].name}' training data source")

    app.register_blueprint(bp)

    @app.route('/health', methods=['GET'])
    def health_check():
        """Health check endpoint for load balancers and monitoring"""
        return jsonify({
            'status': 'healthy',
            'service': 'TrainingCycle'
        }), 200

    @app.errorhandler(500)
    def handle_500_error(e):
        """Return JSON for API errors - sanitized to prevent information leakage"""
        if request.path.startswith('/api/'):
            app.logger.error(f"500 error on {request.path}: {e}", exc_info=True)
            return jsonify({
                'success': False,
                'errors': ['An internal error occurred. Please try again later.']
            }), 500
        return e

    @app.errorhandler(404)
    def handle_404_error(e):
        """Return JSON for API 404 errors"""
        if request.path.startswith('/api/'):
            return jsonify({
                'success': False,
                'errors': ['Endpoint not found']
            }), 404
        return e

    @app.errorhandler(429)
    def handle_429_error(e):
        return jsonify({
            'success': False,
            'errors': [f'Rate limit exceeded: {e.description}']
        }), 429

    return app


def main():
    """Main entry point - Development only"""
    flask_env = os.environ.get('FLASK_ENV', '').strip().lower()
    if flask_env == 'production':
        print("ERROR: Flask development server cannot run in production mode.")
        print("Use gunicorn instead:")
        print("  gunicorn -c gunicorn.conf.py wsgi:app")
        sys.exit(1)

    app = create_app()

    print("TrainingCycle starting in DEVELOPMENT mode...")
    print("API at http://127.0.0.1:8080/api/players/<player_id>/training-cycle")
    print("Press Ctrl+C to stop the application")

    try:
        app.run(host='127.0.0.1', port=8080, debug=False)
    except KeyboardInterrupt:
        print("\nShutting down TrainingCycle...")


if __name__ == '__main__':
    main()
