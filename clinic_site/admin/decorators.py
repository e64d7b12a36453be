"""
Admin Decorator

Admin authentication is cookie-session based: the ``session`` cookie holds an
opaque token that the session store resolves to an admin user.
"""

from functools import wraps

from flask import current_app, request
from flask_login import current_user

from clinic_site.responses import error_response


def admin_required(f):
    """Decorator to ensure the request is from an authenticated admin.

    - No session cookie -> 401 "Unauthorized"
    - Cookie present but unknown or expired -> 401 "Invalid or expired session"
    - Otherwise the resolved admin is available as ``current_user``
    """
    @wraps(f)
    def wrapper(*args, **kwargs):
        if not request.cookies.get(current_app.config['AUTH_COOKIE_NAME']):
            return error_response('Unauthorized', 401)
        if not current_user.is_authenticated:
            return error_response('Invalid or expired session', 401)
        return f(*args, **kwargs)
    return wrapper
