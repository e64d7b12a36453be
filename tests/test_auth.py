from datetime import timedelta

from clinic_site.extensions import db
from clinic_site.models import Session
from clinic_site.models.base import utcnow

from conftest import ADMIN_USERNAME, ADMIN_PASSWORD


def _login(client, username=ADMIN_USERNAME, password=ADMIN_PASSWORD):
    return client.post('/api/admin/login', json={'username': username, 'password': password})


def test_login_success_creates_session_and_cookie(app, client, admin_user):
    r = _login(client)
    assert r.status_code == 200
    body = r.get_json()
    assert body['success'] is True
    assert body['message'] == 'Logged in successfully'
    assert body['data'] == {'id': admin_user, 'username': ADMIN_USERNAME}

    cookie = r.headers['Set-Cookie']
    assert cookie.startswith('session=')
    assert 'HttpOnly' in cookie
    assert 'SameSite=Strict' in cookie
    assert 'Max-Age=86400' in cookie
    assert 'Path=/' in cookie

    token = cookie.split(';', 1)[0].split('=', 1)[1]
    with app.app_context():
        rows = Session.query.all()
        assert len(rows) == 1
        assert rows[0].id == token
        assert rows[0].user_id == admin_user
        remaining = rows[0].expires_at - utcnow()
        assert timedelta(hours=23, minutes=59) < remaining <= timedelta(hours=24)


def test_login_wrong_password(app, client, admin_user):
    r = _login(client, password='wrong')
    assert r.status_code == 401
    assert r.get_json() == {'success': False, 'error': 'Invalid credentials'}
    assert 'Set-Cookie' not in r.headers
    with app.app_context():
        assert Session.query.count() == 0


def test_login_unknown_user(client, admin_user):
    r = _login(client, username='nobody')
    assert r.status_code == 401
    assert r.get_json()['error'] == 'Invalid credentials'


def test_login_missing_fields(client, admin_user):
    r = client.post('/api/admin/login', json={'username': ADMIN_USERNAME})
    assert r.status_code == 400
    assert r.get_json()['error'] == 'Username and password are required'


def test_admin_route_without_cookie(client):
    r = client.get('/api/admin/blog')
    assert r.status_code == 401
    assert r.get_json() == {'success': False, 'error': 'Unauthorized'}


def test_admin_route_with_unknown_token(client):
    client.set_cookie('session', 'bogus')
    r = client.get('/api/admin/blog')
    assert r.status_code == 401
    assert r.get_json()['error'] == 'Invalid or expired session'


def test_admin_route_with_expired_session(app, client, admin_user):
    with app.app_context():
        db.session.add(Session(id='expired-token', user_id=admin_user,
                               expires_at=utcnow() - timedelta(seconds=1)))
        db.session.commit()

    client.set_cookie('session', 'expired-token')
    r = client.get('/api/admin/me')
    assert r.status_code == 401
    assert r.get_json()['error'] == 'Invalid or expired session'


def test_me_returns_current_admin(auth_client, admin_user):
    r = auth_client.get('/api/admin/me')
    assert r.status_code == 200
    assert r.get_json()['data'] == {'id': admin_user, 'username': ADMIN_USERNAME}


def test_auth_does_not_leak_between_clients(app, auth_client):
    other = app.test_client()
    r = other.get('/api/admin/me')
    assert r.status_code == 401


def test_logout_deletes_session(app, auth_client):
    r = auth_client.post('/api/admin/logout')
    assert r.status_code == 200
    assert r.get_json()['message'] == 'Logged out successfully'
    assert 'Max-Age=0' in r.headers['Set-Cookie']

    with app.app_context():
        assert Session.query.count() == 0
    assert auth_client.get('/api/admin/me').status_code == 401


def test_logout_without_session_is_ok(client):
    r = client.post('/api/admin/logout')
    assert r.status_code == 200
    assert r.get_json()['success'] is True


def test_change_password(app, auth_client):
    r = auth_client.post('/api/admin/change-password',
                         json={'currentPassword': ADMIN_PASSWORD, 'newPassword': 'a-new-secret'})
    assert r.status_code == 200
    assert r.get_json()['message'] == 'Password changed successfully'

    fresh = app.test_client()
    assert _login(fresh).status_code == 401
    assert _login(fresh, password='a-new-secret').status_code == 200


def test_change_password_rejects_wrong_current(auth_client):
    r = auth_client.post('/api/admin/change-password',
                         json={'currentPassword': 'nope', 'newPassword': 'a-new-secret'})
    assert r.status_code == 401
    assert r.get_json()['error'] == 'Current password is incorrect'


def test_change_password_rejects_short_password(auth_client):
    r = auth_client.post('/api/admin/change-password',
                         json={'currentPassword': ADMIN_PASSWORD, 'newPassword': 'short'})
    assert r.status_code == 400


def test_create_admin_command(app):
    result = app.test_cli_runner().invoke(
        args=['create-admin', '--username', 'second', '--password', 'another-pass'])
    assert result.exit_code == 0
    assert "Admin user 'second' created." in result.output

    client = app.test_client()
    assert _login(client, username='second', password='another-pass').status_code == 200
