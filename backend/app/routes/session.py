"""
routes/session.py — Login, logout and session restore.

Endpoints (url_prefix=/api/session):
  GET    /api/session  → 200 {"user": {...} | null}
  POST   /api/session  → 200 {"user": {...}} + token cookie
  DELETE /api/session  → 200 {"message": "success"}, token cookie cleared

AppError propagates to the global error handler — routes never catch it.
"""

from __future__ import annotations

from flask import Blueprint, current_app, g, jsonify, request

from backend.app.errors import login_failed
from backend.app.extensions import db
from backend.app.middleware.auth_middleware import end_session, start_session
from backend.app.schemas.auth_schema import LoginSchema
from backend.app.services import auth_service

session_bp = Blueprint("session", __name__)


@session_bp.route("", methods=["GET"])
def restore():
    """GET /api/session — Current session user, or null."""
    user = g.get("user")
    return jsonify({"user": auth_service.session_user(user) if user else None}), 200


@session_bp.route("", methods=["POST"])
def login():
    """POST /api/session — Log in with username or e-mail."""
    data = LoginSchema().load(request.get_json(force=True, silent=True) or {})
    user = auth_service.verify(
        credential=data["credential"],
        password=data["password"],
        session=db.session,
    )
    if user is None:
        current_app.logger.info("Failed login attempt.")
        raise login_failed()

    response = jsonify({"user": auth_service.session_user(user)})
    start_session(response, user)
    return response, 200


@session_bp.route("", methods=["DELETE"])
def logout():
    """DELETE /api/session — Clear the session cookie."""
    response = jsonify({"message": "success"})
    end_session(response)
    return response, 200
