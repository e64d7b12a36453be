"""
Admin User and Session Models
"""

from flask_login import UserMixin

from clinic_site.extensions import db
from clinic_site.models.base import SerializerMixin, utcnow


class AdminUser(UserMixin, SerializerMixin, db.Model):
    """The single-tenant site administrator"""
    __tablename__ = 'admin_users'
    __serialize_exclude__ = ('password_hash',)

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(80), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    created_at = db.Column(db.DateTime, default=utcnow)

    sessions = db.relationship('Session', backref='user', lazy=True,
                               cascade='all, delete-orphan')

    def __repr__(self):
        return f'<AdminUser {self.username}>'


class Session(SerializerMixin, db.Model):
    """Server-side login session keyed by the opaque cookie token"""
    __tablename__ = 'sessions'

    id = db.Column(db.String(64), primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('admin_users.id', ondelete='CASCADE'),
                        nullable=False)
    expires_at = db.Column(db.DateTime, nullable=False, index=True)
    created_at = db.Column(db.DateTime, default=utcnow)

    def __repr__(self):
        return f'<Session user:{self.user_id} expires:{self.expires_at}>'
