"""
Auth Routes

Admin login/logout over the ``session`` cookie, backed by the session store.
"""

import logging

from flask import current_app, request
from flask_login import current_user
from werkzeug.security import generate_password_hash, check_password_hash

from clinic_site.admin.decorators import admin_required
from clinic_site.auth import auth_bp
from clinic_site.errors import ValidationError
from clinic_site.extensions import db
from clinic_site.models import AdminUser
from clinic_site.responses import success_response, error_response, get_json_body
from clinic_site.services.sessions import get_session_store

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 8


def _set_session_cookie(response, token):
    store = get_session_store()
    response.set_cookie(
        current_app.config['AUTH_COOKIE_NAME'], token,
        max_age=int(store.lifetime.total_seconds()),
        path='/', httponly=True, samesite='Strict',
        secure=current_app.config['AUTH_COOKIE_SECURE'],
    )
    return response


def _clear_session_cookie(response):
    response.set_cookie(
        current_app.config['AUTH_COOKIE_NAME'], '',
        max_age=0, path='/', httponly=True, samesite='Strict',
        secure=current_app.config['AUTH_COOKIE_SECURE'],
    )
    return response


def _user_payload(user):
    return {'id': user.id, 'username': user.username}


@auth_bp.route('/login', methods=['POST'])
def login():
    """Check credentials, open a session and hand back the cookie."""
    try:
        body = get_json_body()
        username = str(body.get('username') or '').strip()
        password = str(body.get('password') or '')

        if not username or not password:
            return error_response('Username and password are required', 400)

        user = AdminUser.query.filter_by(username=username).first()
        if not user or not check_password_hash(user.password_hash, password):
            logger.warning('Failed admin login for %r', username)
            return error_response('Invalid credentials', 401)

        token = get_session_store().create_session(user.id)
        logger.info('Admin %s logged in', user.username)
        response, status = success_response(_user_payload(user), 'Logged in successfully')
        return _set_session_cookie(response, token), status
    except ValidationError as e:
        return error_response(str(e), 400)
    except Exception:
        db.session.rollback()
        logger.exception('Login failed')
        return error_response('Login failed', 500)


@auth_bp.route('/logout', methods=['POST'])
def logout():
    """Drop the server-side session (if any) and expire the cookie."""
    try:
        token = request.cookies.get(current_app.config['AUTH_COOKIE_NAME'])
        if token:
            get_session_store().delete_session(token)
            logger.info('Admin session closed')
        response, status = success_response(message='Logged out successfully')
        return _clear_session_cookie(response), status
    except Exception:
        db.session.rollback()
        logger.exception('Logout failed')
        return error_response('Logout failed', 500)


@auth_bp.route('/me', methods=['GET'])
@admin_required
def me():
    return success_response(_user_payload(current_user))


@auth_bp.route('/change-password', methods=['POST'])
@admin_required
def change_password():
    """Replace the current admin's password after re-checking the old one."""
    try:
        body = get_json_body()
        current_password = str(body.get('currentPassword') or '')
        new_password = str(body.get('newPassword') or '')

        if not current_password or not new_password:
            return error_response('Current and new password are required', 400)
        if len(new_password) < MIN_PASSWORD_LENGTH:
            return error_response(
                f'New password must be at least {MIN_PASSWORD_LENGTH} characters long', 400)

        user = db.session.get(AdminUser, current_user.id)
        if not check_password_hash(user.password_hash, current_password):
            return error_response('Current password is incorrect', 401)

        user.password_hash = generate_password_hash(new_password)
        db.session.commit()
        logger.info('Admin %s changed password', user.username)
        return success_response(message='Password changed successfully')
    except ValidationError as e:
        return error_response(str(e), 400)
    except Exception:
        db.session.rollback()
        logger.exception('Change password failed')
        return error_response('Failed to change password', 500)
