"""
routes/csrf.py — CSRF token bootstrap.

Endpoints (url_prefix=/api/csrf):
  GET /api/csrf/restore → 200 {"XSRF-Token": "..."} + readable XSRF-TOKEN cookie

Clients echo the cookie value in X-CSRF-Token on every non-GET request.
CSRFProtect (extensions.py) enforces it; failures surface as CSRF_INVALID 403.
"""

from __future__ import annotations

from flask import Blueprint, current_app, jsonify
from flask_wtf.csrf import generate_csrf

csrf_bp = Blueprint("csrf", __name__)


@csrf_bp.route("/restore", methods=["GET"])
def restore_csrf():
    """GET /api/csrf/restore — Issue the XSRF-TOKEN cookie for the client."""
    token = generate_csrf()
    response = jsonify({"XSRF-Token": token})
    response.set_cookie(
        current_app.config["CSRF_COOKIE_NAME"],
        token,
        secure=current_app.config.get("TOKEN_COOKIE_SECURE", False),
        samesite=current_app.config.get("TOKEN_COOKIE_SAMESITE"),
    )
    return response, 200
