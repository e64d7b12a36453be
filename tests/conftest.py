import pytest
from werkzeug.security import generate_password_hash

from clinic_site import create_app
from clinic_site.config import TestConfig
from clinic_site.extensions import db
from clinic_site.models import AdminUser

ADMIN_USERNAME = 'doctor'
ADMIN_PASSWORD = 'correct-horse'


@pytest.fixture()
def app(tmp_path):
    class _Config(TestConfig):
        UPLOAD_FOLDER = str(tmp_path / 'uploads')

    app = create_app(_Config)
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def admin_user(app):
    with app.app_context():
        user = AdminUser(username=ADMIN_USERNAME,
                         password_hash=generate_password_hash(ADMIN_PASSWORD))
        db.session.add(user)
        db.session.commit()
        return user.id


@pytest.fixture()
def auth_client(client, admin_user):
    r = client.post('/api/admin/login',
                    json={'username': ADMIN_USERNAME, 'password': ADMIN_PASSWORD})
    assert r.status_code == 200
    return client
