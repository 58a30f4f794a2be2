"""
middleware/auth_middleware.py — Session cookie authentication.

restore_user (registered as a before_request hook in the app factory):
  1. Reads the "token" cookie
  2. Resolves it to a User via session_service.resolve
  3. Attaches the User (or None) to flask.g.user
  4. If a cookie was presented but did not resolve, the cookie is cleared
     on the outgoing response (clear_stale_cookie, an after_request hook)

@require_session:
  Raises the 401 UNAUTHORIZED AppError when flask.g.user is None.

Strict responsibility boundary:
  - Middleware = authentication (401). Ownership checks (403) belong in
    the service layer. Services receive the user id as a plain int.
"""

from __future__ import annotations

import functools
from typing import Callable

from flask import Response, current_app, g, request

from backend.app.errors import unauthorized
from backend.app.extensions import db
from backend.app.models.user import User
from backend.app.services import session_service


def restore_user() -> None:
    """before_request hook: populate g.user from the session cookie."""
    token = request.cookies.get(current_app.config["TOKEN_COOKIE_NAME"])
    g.user = session_service.resolve(token, db.session)
    g.clear_token_cookie = bool(token) and g.user is None


def clear_stale_cookie(response: Response) -> Response:
    """after_request hook: drop a token cookie that failed to resolve."""
    if g.get("clear_token_cookie"):
        session_service.clear_token_cookie(response)
    return response


def start_session(response: Response, user: User) -> Response:
    """Issues a token for `user` and sets it on `response`."""
    g.clear_token_cookie = False
    g.user = user
    return session_service.set_token_cookie(response, session_service.issue(user))


def end_session(response: Response) -> Response:
    g.clear_token_cookie = False
    g.user = None
    return session_service.clear_token_cookie(response)


def require_session(f: Callable) -> Callable:
    """
    Route decorator that enforces an authenticated session.

    Usage:
        @cafes_bp.route("/new", methods=["POST"])
        @require_session
        def create_cafe():
            owner_id = g.user.id
            ...
    """
    @functools.wraps(f)
    def decorated(*args, **kwargs):
        if g.get("user") is None:
            raise unauthorized()
        return f(*args, **kwargs)

    return decorated
