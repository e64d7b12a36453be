"""
Flask Extensions

Admin identity is resolved per request from the ``session`` cookie through
the session store; Flask-Login only carries the resolved user.
"""

from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager

# Database instance
db = SQLAlchemy()

# Login manager, fed by a request loader (no Flask session state)
login_manager = LoginManager()
