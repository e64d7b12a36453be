"""
Admin Blueprint

Authenticated write API over the site content.
"""

from flask import Blueprint

admin_bp = Blueprint('admin', __name__)

from clinic_site.admin import routes  # noqa: E402, F401
