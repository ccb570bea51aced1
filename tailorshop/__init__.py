"""Flask application factory."""
import os

from flask import Flask, jsonify
from pydantic import ValidationError
from werkzeug.exceptions import HTTPException

from tailorshop.database import init_db


def create_app(config_object='config.Config'):
    """Create and configure the Flask application."""
    app = Flask(__name__)
    app.config.from_object(config_object)

    # Initialize Sentry for error tracking in production
    if os.getenv('SENTRY_DSN') and (app.config.get('ENV') == 'production' or os.getenv('FLASK_ENV') == 'production'):
        import sentry_sdk
        from sentry_sdk.integrations.flask import FlaskIntegration

        sentry_sdk.init(
            dsn=os.getenv('SENTRY_DSN'),
            integrations=[FlaskIntegration()],
            traces_sample_rate=0.1,
            environment=os.getenv('FLASK_ENV', 'production'),
            release=os.getenv('GIT_COMMIT', 'unknown')
        )

    # Production: Enable ProxyFix behind a reverse proxy
    if app.config.get('ENV') == 'production':
        from werkzeug.middleware.proxy_fix import ProxyFix
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_port=1, x_prefix=0)

    # Initialize database and the state store on top of it
    session_registry = init_db(app)

    from tailorshop.services.persistence_service import StateStorage, attach_persistence, load_initial_state
    from tailorshop.store import Store

    storage = StateStorage(session_registry)
    store = Store(load_initial_state(storage, app.config))
    attach_persistence(store, storage, app.config)
    app.extensions['tailorshop'] = {'store': store, 'storage': storage}

    # Error Handlers
    from tailorshop.exceptions import TailorShopError

    @app.errorhandler(TailorShopError)
    def handle_app_error(error):
        """Handle custom application exceptions."""
        app.logger.warning(f"TailorShopError [{error.status_code}]: {error.message}")
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(ValidationError)
    def handle_validation_error(error):
        """Malformed records in a request body."""
        app.logger.warning(f"ValidationError: {error.error_count()} error(s)")
        details = [
            {'field': '.'.join(str(part) for part in e['loc']), 'message': e['msg']}
            for e in error.errors()
        ]
        return jsonify({'status': 'error', 'message': 'Invalid data', 'errors': details}), 400

    @app.errorhandler(404)
    def not_found_error(error):
        return jsonify({'status': 'error', 'message': 'Not Found'}), 404

    @app.errorhandler(Exception)
    def internal_error(error):
        if isinstance(error, HTTPException):
            return jsonify({'status': 'error', 'message': error.description}), error.code

        import traceback
        app.logger.error(f"Unhandled Exception: {error}")
        app.logger.error(f"Traceback: {traceback.format_exc()}")
        return jsonify({'status': 'error', 'message': 'Internal Server Error'}), 500

    # Register blueprints
    from tailorshop.blueprints.auth import auth_bp
    from tailorshop.blueprints.dashboard import dashboard_bp
    from tailorshop.blueprints.customers import customers_bp
    from tailorshop.blueprints.orders import orders_bp
    from tailorshop.blueprints.employees import employees_bp
    from tailorshop.blueprints.settings import settings_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(dashboard_bp)
    app.register_blueprint(customers_bp)
    app.register_blueprint(orders_bp)
    app.register_blueprint(employees_bp)
    app.register_blueprint(settings_bp)

    # Register CLI commands
    from tailorshop.cli_commands import init_cli_commands
    init_cli_commands(app)

    app.logger.info(f"Tailor shop ready: {len(store.state.orders)} orders, {len(store.state.customers)} customers")

    return app
