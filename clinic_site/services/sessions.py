"""
Session Store

Issues, validates and expires the opaque tokens behind the admin ``session``
cookie. One store is built per application and kept in
``app.extensions['session_store']``.
"""

import logging
import secrets
import threading
from datetime import timedelta

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from clinic_site.extensions import db
from clinic_site.models import AdminUser, Session
from clinic_site.models.base import utcnow

logger = logging.getLogger(__name__)

DEFAULT_LIFETIME = timedelta(hours=24)


class SessionStore:
    """Database-backed admin sessions.

    Args:
        lifetime: how long a new session stays valid
        clock: callable returning the current naive UTC time
    """

    def __init__(self, lifetime=DEFAULT_LIFETIME, clock=utcnow):
        self.lifetime = lifetime
        self.clock = clock

    def create_session(self, user_id):
        """Persist a new session for ``user_id`` and return its token."""
        token = secrets.token_urlsafe(32)
        db.session.add(Session(id=token, user_id=user_id,
                               expires_at=self.clock() + self.lifetime))
        db.session.commit()
        return token

    def get_session(self, token):
        """Return the live session for ``token``; expired rows count as absent."""
        if not token:
            return None
        return Session.query.filter(Session.id == token,
                                    Session.expires_at > self.clock()).first()

    def get_user(self, token):
        session = self.get_session(token)
        if session is None:
            return None
        return db.session.get(AdminUser, session.user_id)

    def delete_session(self, token):
        if not token:
            return
        Session.query.filter_by(id=token).delete()
        db.session.commit()

    def cleanup_expired_sessions(self):
        """Delete every session with ``expires_at <= now``; returns the count."""
        removed = Session.query.filter(Session.expires_at <= self.clock()).delete()
        db.session.commit()
        if removed:
            logger.info('Removed %d expired session(s)', removed)
        return removed


def get_session_store():
    return current_app.extensions['session_store']


def load_user_from_token(token):
    """Resolve a cookie token to an admin; lookup failures mean unauthenticated."""
    try:
        return get_session_store().get_user(token)
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception('Session lookup failed')
        return None


class SessionSweeper:
    """Background thread purging expired sessions on a fixed interval."""

    def __init__(self, app, interval):
        self.app = app
        self.interval = interval
        self._stopped = threading.Event()
        self._thread = threading.Thread(target=self._run, name='session-sweeper', daemon=True)

    def start(self):
        self._thread.start()
        logger.info('Session sweeper started (every %ss)', self.interval)
        return self

    def stop(self, timeout=None):
        """Ask the loop to exit and wait for the thread to finish."""
        self._stopped.set()
        if self._thread.is_alive():
            self._thread.join(timeout)

    @property
    def running(self):
        return self._thread.is_alive()

    def _run(self):
        while not self._stopped.wait(self.interval):
            with self.app.app_context():
                try:
                    self.app.extensions['session_store'].cleanup_expired_sessions()
                except Exception:
                    db.session.rollback()
                    logger.exception('Expired session sweep failed')
                finally:
                    db.session.remove()
