"""
Services Package

Exports all services for easy importing.
"""

from clinic_site.services.blog import calculate_reading_time, render_content, slugify, word_count
from clinic_site.services.sessions import SessionStore, SessionSweeper, get_session_store, load_user_from_token
from clinic_site.services.uploads import save_image, delete_image

__all__ = [
    'calculate_reading_time',
    'render_content',
    'slugify',
    'word_count',
    'SessionStore',
    'SessionSweeper',
    'get_session_store',
    'load_user_from_token',
    'save_image',
    'delete_image',
]
