"""
wsgi.py — Entry point for `flask --app backend.wsgi ...` and WSGI servers.

FLASK_ENV selects the config (development | testing | production).
"""

import os

from backend.app import create_app

app = create_app(os.getenv("FLASK_ENV", "development"))
