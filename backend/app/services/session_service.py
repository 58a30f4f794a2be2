"""
services/session_service.py — Session token lifecycle.

Token design:
  - HS256 JWT signed with JWT_SECRET_KEY
  - Payload: {"data": session_user(user), "iat": ..., "exp": ...}
  - TTL from JWT_EXPIRES (default 1 week)
  - Delivered in the HttpOnly cookie named TOKEN_COOKIE_NAME ("token")

There is no refresh or rotation: an expired token means logging in again.
`resolve` never raises; any failure is reported as None.
"""

from __future__ import annotations

from datetime import datetime, timezone

import jwt
from flask import Response, current_app
from sqlalchemy.orm import Session

from backend.app.models.user import User
from backend.app.services.auth_service import session_user


def issue(user: User) -> str:
    """Creates a signed session token for `user`."""
    now = datetime.now(timezone.utc)
    payload = {
        "data": session_user(user),
        "iat": now,
        "exp": now + current_app.config["JWT_EXPIRES"],
    }
    return jwt.encode(
        payload,
        current_app.config["JWT_SECRET_KEY"],
        algorithm=current_app.config.get("JWT_ALGORITHM", "HS256"),
    )


def resolve(token: str | None, session: Session) -> User | None:
    """
    Verifies signature and expiry, then reloads the user the token names.

    Returns None for a missing, malformed, tampered or expired token, and
    for a token whose user no longer exists.
    """
    if not token:
        return None

    try:
        payload = jwt.decode(
            token,
            current_app.config["JWT_SECRET_KEY"],
            algorithms=[current_app.config.get("JWT_ALGORITHM", "HS256")],
        )
    except jwt.ExpiredSignatureError:
        current_app.logger.debug("Session token expired.")
        return None
    except jwt.InvalidTokenError:
        current_app.logger.info("Rejected an invalid session token.")
        return None

    data = payload.get("data")
    if not isinstance(data, dict):
        return None

    try:
        user_id = int(data.get("id"))
    except (TypeError, ValueError):
        return None

    return session.get(User, user_id)


def set_token_cookie(response: Response, token: str) -> Response:
    """Attaches the session token cookie to `response`."""
    config = current_app.config
    response.set_cookie(
        config["TOKEN_COOKIE_NAME"],
        token,
        max_age=int(config["JWT_EXPIRES"].total_seconds()),
        httponly=True,
        secure=config.get("TOKEN_COOKIE_SECURE", False),
        samesite=config.get("TOKEN_COOKIE_SAMESITE"),
    )
    return response


def clear_token_cookie(response: Response) -> Response:
    config = current_app.config
    response.delete_cookie(
        config["TOKEN_COOKIE_NAME"],
        httponly=True,
        secure=config.get("TOKEN_COOKIE_SECURE", False),
        samesite=config.get("TOKEN_COOKIE_SAMESITE"),
    )
    return response
