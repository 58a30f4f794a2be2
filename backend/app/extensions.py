"""
extensions.py — Flask extension singletons.

Initialises SQLAlchemy, marshmallow and the CSRF guard as module-level objects
so they can be imported anywhere without creating circular dependencies.

Pattern:
    1. Create the extension object here (no app attached yet).
    2. Call init_app(app) inside the app factory in app/__init__.py.
    3. Import `db`, `ma` or `csrf` from here wherever needed.

Do not pass the app object directly to the extension constructors — that
would prevent running tests with a separate test app instance.
"""

from flask_marshmallow import Marshmallow
from flask_sqlalchemy import SQLAlchemy
from flask_wtf.csrf import CSRFProtect

db = SQLAlchemy()

# Marshmallow instance. Import as:  from backend.app.extensions import ma
#
# IMPORTANT — schema inheritance rule:
#   Validation Schema classes in app/schemas/ inherit from marshmallow.Schema
#   directly, NOT from ma.Schema. ma.Schema requires an active Flask app
#   context, and the unit tests instantiate schemas without one.
ma = Marshmallow()

# Double-submit CSRF guard. Every POST/PUT/PATCH/DELETE must carry the token
# issued by GET /api/csrf/restore in the X-CSRF-Token header.
csrf = CSRFProtect()
