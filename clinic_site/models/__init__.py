"""
Models Package

Exports all models for easy importing.
"""

from clinic_site.models.admin_user import AdminUser, Session
from clinic_site.models.appointment import Appointment, APPOINTMENT_STATUSES
from clinic_site.models.blog import BlogPost, DEFAULT_THEME
from clinic_site.models.content import (
    Profile, ContactInfo, Service, Education, Experience, Skill, Award,
    PortfolioItem, SocialLink,
)

__all__ = [
    'AdminUser', 'Session', 'Appointment', 'APPOINTMENT_STATUSES', 'BlogPost',
    'DEFAULT_THEME', 'Profile', 'ContactInfo', 'Service', 'Education',
    'Experience', 'Skill', 'Award', 'PortfolioItem', 'SocialLink',
]
