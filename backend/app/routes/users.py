"""
routes/users.py — Signup.

Endpoints (url_prefix=/api/users):
  POST /api/users → 200 {"user": {...}} + token cookie
"""

from __future__ import annotations

from flask import Blueprint, jsonify, request

from backend.app.extensions import db
from backend.app.middleware.auth_middleware import start_session
from backend.app.schemas.auth_schema import SignupSchema
from backend.app.services import auth_service

users_bp = Blueprint("users", __name__)


@users_bp.route("", methods=["POST"])
def signup():
    """POST /api/users — Create an account and log it in."""
    data = SignupSchema().load(request.get_json(force=True, silent=True) or {})
    user = auth_service.signup(
        username=data["username"],
        email=data["email"],
        password=data["password"],
        session=db.session,
    )
    db.session.commit()

    response = jsonify({"user": auth_service.session_user(user)})
    start_session(response, user)
    return response, 200
