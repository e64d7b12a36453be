"""
Practice Website API - Application Factory

This module provides the Flask application factory pattern for creating
and configuring the application instance.
"""

import logging
import os
from datetime import timedelta

from flask import Flask, current_app
from werkzeug.security import generate_password_hash

from clinic_site.extensions import db, login_manager
from clinic_site.config import Config

logger = logging.getLogger(__name__)


def create_app(config_class=Config):
    """Create and configure the Flask application.

    Args:
        config_class: Configuration class to use (default: Config)

    Returns:
        Configured Flask application instance
    """
    app = Flask(__name__)
    app.config.from_object(config_class)
    _configure_logging(app)

    # Initialize extensions
    db.init_app(app)
    login_manager.init_app(app)
    login_manager.session_protection = None

    from clinic_site.services.sessions import SessionStore, SessionSweeper, load_user_from_token
    app.extensions['session_store'] = SessionStore(
        lifetime=timedelta(hours=app.config['SESSION_LIFETIME_HOURS']))

    # Admin identity comes from the session cookie, never from Flask's session
    @login_manager.request_loader
    def load_admin_from_request(request):
        token = request.cookies.get(current_app.config['AUTH_COOKIE_NAME'])
        if not token:
            return None
        return load_user_from_token(token)

    # Register blueprints
    from clinic_site.auth import auth_bp
    from clinic_site.admin import admin_bp
    from clinic_site.public import public_bp
    from clinic_site.public.routes import serve_upload

    app.register_blueprint(auth_bp, url_prefix='/api/admin')
    app.register_blueprint(admin_bp, url_prefix='/api/admin')
    app.register_blueprint(public_bp, url_prefix='/api')
    app.add_url_rule('/uploads/<path:filename>', 'uploads', serve_upload)

    from clinic_site.cli import register_commands
    register_commands(app)

    # Create database tables
    with app.app_context():
        _ensure_sqlite_folder(app)
        db.create_all()
        _ensure_default_admin(app)

    if app.config['SESSION_SWEEPER_ENABLED']:
        app.extensions['session_sweeper'] = SessionSweeper(
            app, app.config['SESSION_CLEANUP_INTERVAL']).start()

    return app


def _configure_logging(app):
    package_logger = logging.getLogger('clinic_site')
    package_logger.setLevel(app.config['LOG_LEVEL'])
    if not package_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter('%(asctime)s %(levelname)s [%(name)s] %(message)s'))
        package_logger.addHandler(handler)


def _ensure_sqlite_folder(app):
    uri = app.config['SQLALCHEMY_DATABASE_URI']
    if uri.startswith('sqlite:///') and ':memory:' not in uri:
        folder = os.path.dirname(uri[len('sqlite:///'):])
        if folder:
            os.makedirs(folder, exist_ok=True)


def _ensure_default_admin(app):
    """Create the bootstrap admin when a password is configured and none exists."""
    from clinic_site.models import AdminUser

    password = app.config.get('ADMIN_PASSWORD')
    if not password or AdminUser.query.first() is not None:
        return

    username = app.config['ADMIN_USERNAME']
    db.session.add(AdminUser(username=username, password_hash=generate_password_hash(password)))
    db.session.commit()
    logger.info("Created admin user '%s' from configuration", username)
