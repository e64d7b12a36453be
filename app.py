"""
Practice Website API

Development server. ``flask --app app <command>`` exposes the management
commands (create-admin, cleanup-sessions, seed).
"""

import os

from clinic_site import create_app

app = create_app()

if __name__ == '__main__':
    app.run(debug=os.environ.get('FLASK_DEBUG') == '1',
            host=os.environ.get('HOST', '0.0.0.0'),
            port=int(os.environ.get('PORT', 5000)))
