"""
Portfolio Contact API - Main Application Entry Point
Application Factory Pattern; all route handling is delegated to blueprints.

Run locally with `flask --app app run`, or under gunicorn with
`gunicorn "app:create_app()"`.
"""

import os
from flask import Flask
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException
from werkzeug.middleware.proxy_fix import ProxyFix
from config import get_config
from extensions import db
from utils.errors import ContactAPIError
from utils.responses import success_response, error_response

# Import all blueprints
from blueprints.contact import contact_bp
from blueprints.admin import admin_bp


def create_app(config_name=None, overrides=None):
    """
    Application Factory Pattern
    Creates and configures Flask application instance

    Args:
        config_name (str): Configuration environment name (optional,
            defaults to FLASK_ENV)
        overrides (dict): Config values applied on top (optional)

    Returns:
        Flask: Configured Flask application instance
    """

    app = Flask(__name__)

    # Load configuration
    conf = get_config(config_name)
    app.config.from_object(conf)
    if overrides:
        app.config.update(overrides)
    app.json.ensure_ascii = False

    proxy_count = app.config.get('TRUSTED_PROXY_COUNT', 0)
    if proxy_count:
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=proxy_count)

    if not app.config.get('ADMIN_KEY'):
        app.logger.warning('ADMIN_KEY is not set; admin endpoints will reject every request')

    # Initialize extensions with app
    initialize_extensions(app)

    # Register blueprints
    register_blueprints(app)

    # Register error handlers
    register_error_handlers(app)

    # Register request/response hooks
    register_hooks(app)

    # Health check route
    @app.route('/api/health')
    def health_check():
        return success_response({
            'status': 'ok',
            'environment': app.config.get('ENV_NAME')
        }, 'Portfolio Contact API is running')

    return app


def initialize_extensions(app):
    """Bind the database handle to the app and create tables"""
    db.init_app(app)

    with app.app_context():
        try:
            from sqlalchemy import text
            import models  # noqa: F401  (registers tables on db.metadata)
            db.create_all()
            # Verify connection
            db.session.execute(text('SELECT 1'))
            app.logger.info("✓ Database initialized successfully")
        except SQLAlchemyError as e:
            app.logger.error(f"✗ Database initialization failed: {str(e)}")


def register_blueprints(app):
    """Register all application blueprints"""
    app.register_blueprint(contact_bp)
    app.register_blueprint(admin_bp)


def register_error_handlers(app):
    """Every error leaves as a {success: false, ...} envelope"""

    @app.errorhandler(ContactAPIError)
    def contact_api_error(e):
        return error_response(
            e.message,
            e.status_code,
            errors=getattr(e, 'errors', None),
            detail=e.detail
        )

    @app.errorhandler(HTTPException)
    def http_error(e):
        messages = {
            400: 'Bad request',
            404: 'Route not found',
            405: 'Method not allowed',
            413: 'Request body is too large'
        }
        return error_response(messages.get(e.code, e.name), e.code or 500)

    @app.errorhandler(Exception)
    def internal_server_error(e):
        app.logger.error(f"Server Error: {str(e)}", exc_info=e)
        return error_response('Internal server error', 500, detail=str(e))


def register_hooks(app):
    """Register request/response hooks"""

    @app.after_request
    def add_security_headers(response):
        """Add security headers to all responses"""
        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['X-Frame-Options'] = 'DENY'
        response.headers['Referrer-Policy'] = 'no-referrer'
        response.headers['Cache-Control'] = 'no-store'
        return response


if __name__ == '__main__':
    # Get environment
    env = os.environ.get('FLASK_ENV', 'production')

    # Create app
    app = create_app(env)

    # Run development server
    app.run(
        host='0.0.0.0',
        port=int(os.environ.get('PORT', 5000)),
        debug=(env == 'development')
    )
