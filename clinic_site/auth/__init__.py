"""
Auth Blueprint

Admin login, logout and account routes.
"""

from flask import Blueprint

auth_bp = Blueprint('auth', __name__)

from clinic_site.auth import routes  # noqa: E402, F401
