"""
Configuration settings for the practice website API
"""
import os
import tempfile

from dotenv import load_dotenv

load_dotenv()


def _env_flag(name, default=False):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


class Config:
    """Flask application configuration"""

    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production-12345'

    # Database configuration
    basedir = os.path.abspath(os.path.dirname(os.path.dirname(__file__)))
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or \
        'sqlite:///' + os.path.join(basedir, 'instance', 'portfolio.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Flask's signed session cookie must not shadow the auth cookie
    SESSION_COOKIE_NAME = 'flask_session'

    # Admin session cookie
    AUTH_COOKIE_NAME = 'session'
    AUTH_COOKIE_SECURE = _env_flag('AUTH_COOKIE_SECURE')
    SESSION_LIFETIME_HOURS = int(os.environ.get('SESSION_LIFETIME_HOURS', 24))

    # Expired session sweep, in seconds
    SESSION_CLEANUP_INTERVAL = int(os.environ.get('SESSION_CLEANUP_INTERVAL', 60 * 60))
    SESSION_SWEEPER_ENABLED = True

    # Uploads
    UPLOAD_FOLDER = os.environ.get('UPLOAD_FOLDER') or os.path.join(basedir, 'uploads')
    MAX_UPLOAD_BYTES = 5 * 1024 * 1024

    # Bootstrap admin, only created when a password is provided
    ADMIN_USERNAME = os.environ.get('ADMIN_USERNAME') or 'admin'
    ADMIN_PASSWORD = os.environ.get('ADMIN_PASSWORD')

    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')


class TestConfig(Config):
    """Testing configuration"""
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    SESSION_SWEEPER_ENABLED = False
    UPLOAD_FOLDER = os.path.join(tempfile.gettempdir(), 'clinic_site_test_uploads')
    ADMIN_PASSWORD = None
    LOG_LEVEL = 'DEBUG'
