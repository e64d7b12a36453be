import logging
import time
from datetime import timedelta

import pytest
from werkzeug.security import generate_password_hash

from clinic_site import create_app
from clinic_site.config import TestConfig
from clinic_site.extensions import db
from clinic_site.models import AdminUser, Session
from clinic_site.models.base import utcnow
from clinic_site.services.sessions import SessionStore, SessionSweeper, get_session_store


class FakeClock:
    def __init__(self):
        self.now = utcnow()

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


def test_create_session_persists_row_with_24h_expiry(app, admin_user):
    with app.app_context():
        before = utcnow()
        token = get_session_store().create_session(admin_user)

        row = db.session.get(Session, token)
        assert row is not None
        assert row.user_id == admin_user
        expected = before + timedelta(hours=24)
        assert abs((row.expires_at - expected).total_seconds()) < 5


def test_tokens_are_unique_and_opaque(app, admin_user):
    with app.app_context():
        store = get_session_store()
        tokens = {store.create_session(admin_user) for _ in range(5)}
        assert len(tokens) == 5
        assert all(len(t) >= 32 for t in tokens)


def test_get_session_is_time_gated(app, admin_user):
    clock = FakeClock()
    store = SessionStore(clock=clock)
    with app.app_context():
        token = store.create_session(admin_user)
        assert store.get_session(token) is not None
        assert store.get_user(token).id == admin_user

        clock.advance(hours=24)
        # expires_at == now is already invalid, even though the row still exists
        assert store.get_session(token) is None
        assert store.get_user(token) is None
        assert db.session.get(Session, token) is not None


def test_get_session_unknown_or_empty_token(app):
    with app.app_context():
        store = get_session_store()
        assert store.get_session('does-not-exist') is None
        assert store.get_session('') is None
        assert store.get_user(None) is None


def test_delete_session_is_idempotent(app, admin_user):
    with app.app_context():
        store = get_session_store()
        token = store.create_session(admin_user)
        store.delete_session(token)
        store.delete_session(token)
        assert store.get_session(token) is None
        assert Session.query.count() == 0


def test_cleanup_removes_only_expired_rows(app, admin_user):
    clock = FakeClock()
    store = SessionStore(clock=clock)
    with app.app_context():
        old = store.create_session(admin_user)
        clock.advance(hours=12)
        fresh = store.create_session(admin_user)
        clock.advance(hours=12)  # old expires exactly now, fresh has 12h left

        removed = store.cleanup_expired_sessions()

        assert removed == 1
        assert db.session.get(Session, old) is None
        assert db.session.get(Session, fresh) is not None
        assert store.cleanup_expired_sessions() == 0


def test_cleanup_sessions_command(app, admin_user):
    with app.app_context():
        db.session.add(Session(id='stale', user_id=admin_user,
                               expires_at=utcnow() - timedelta(minutes=1)))
        db.session.commit()

    result = app.test_cli_runner().invoke(args=['cleanup-sessions'])
    assert 'Removed 1 expired session(s).' in result.output

    with app.app_context():
        assert Session.query.count() == 0


class FlakyStore:
    """Fails the first sweep, then delegates to the real store."""

    def __init__(self, store):
        self.store = store
        self.calls = 0

    def cleanup_expired_sessions(self):
        self.calls += 1
        if self.calls == 1:
            raise RuntimeError('disk on fire')
        return self.store.cleanup_expired_sessions()


def _wait_for(predicate, timeout=5.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.02)
    return False


@pytest.fixture()
def file_app(tmp_path):
    # Sweeper and test run in separate threads, so each needs its own connection
    class _Config(TestConfig):
        SQLALCHEMY_DATABASE_URI = 'sqlite:///' + str(tmp_path / 'sweep.db')
        UPLOAD_FOLDER = str(tmp_path / 'uploads')

    app = create_app(_Config)
    with app.app_context():
        user = AdminUser(username='sweeper', password_hash=generate_password_hash('x' * 8))
        db.session.add(user)
        db.session.commit()
        db.session.add(Session(id='stale', user_id=user.id,
                               expires_at=utcnow() - timedelta(minutes=1)))
        db.session.add(Session(id='live', user_id=user.id,
                               expires_at=utcnow() + timedelta(hours=1)))
        db.session.commit()
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


def _session_ids(app):
    with app.app_context():
        ids = {s.id for s in Session.query.all()}
        db.session.remove()
        return ids


def test_sweeper_is_not_started_under_test_config(app):
    assert 'session_sweeper' not in app.extensions


def test_sweeper_purges_expired_sessions_on_interval(file_app):
    sweeper = SessionSweeper(file_app, interval=0.05).start()
    try:
        assert _wait_for(lambda: _session_ids(file_app) == {'live'})
        assert sweeper.running
    finally:
        sweeper.stop(timeout=2)
    assert not sweeper.running


def test_sweeper_survives_failing_sweep(file_app, caplog):
    flaky = FlakyStore(file_app.extensions['session_store'])
    file_app.extensions['session_store'] = flaky

    with caplog.at_level(logging.ERROR, logger='clinic_site'):
        sweeper = SessionSweeper(file_app, interval=0.05).start()
        try:
            assert _wait_for(lambda: _session_ids(file_app) == {'live'})
            assert flaky.calls >= 2
            assert sweeper.running
        finally:
            sweeper.stop(timeout=2)

    assert not sweeper.running
    assert 'Expired session sweep failed' in caplog.text
