"""
Public Blueprint

Read-only content API for the public site, plus appointment booking.
"""

from flask import Blueprint

public_bp = Blueprint('public', __name__)

from clinic_site.public import routes  # noqa: E402, F401
