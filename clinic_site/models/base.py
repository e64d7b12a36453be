"""
Model helpers shared by every table.
"""

from datetime import datetime, timezone

from clinic_site.extensions import db


def utcnow():
    """Naive UTC timestamp, matching how SQLite stores DATETIME columns."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class SerializerMixin:
    """Column-wise ``to_dict`` for JSON responses."""

    __serialize_exclude__ = ()

    def to_dict(self):
        data = {}
        for column in self.__table__.columns:
            if column.name in self.__serialize_exclude__:
                continue
            value = getattr(self, column.name)
            if isinstance(value, datetime):
                value = value.isoformat()
            data[column.name] = value
        return data


class TimestampMixin:
    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)


class OrderedMixin(TimestampMixin):
    """List entities sorted manually by the admin."""
    display_order = db.Column(db.Integer, default=0, nullable=False, index=True)
