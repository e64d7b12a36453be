"""
Appointment Request Model
"""

from clinic_site.extensions import db
from clinic_site.models.base import SerializerMixin, utcnow

APPOINTMENT_STATUSES = ('pending', 'confirmed', 'cancelled', 'completed')


class Appointment(SerializerMixin, db.Model):
    """Booking request submitted from the public site"""
    __tablename__ = 'appointments'

    id = db.Column(db.Integer, primary_key=True)
    full_name = db.Column(db.String(200), nullable=False)
    email = db.Column(db.String(200), nullable=False)
    phone = db.Column(db.String(50))
    message = db.Column(db.Text)
    status = db.Column(db.String(20), default='pending', nullable=False)
    created_at = db.Column(db.DateTime, default=utcnow, index=True)

    def __repr__(self):
        return f'<Appointment {self.full_name} [{self.status}]>'
