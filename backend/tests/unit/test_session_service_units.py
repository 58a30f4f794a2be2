"""
Unit tests for session_service: token issue/resolve and cookie attributes.

A bare Flask app supplies current_app.config; the DB session is mocked.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from types import SimpleNamespace
from unittest.mock import MagicMock

import jwt
import pytest
from flask import Flask

from backend.app.services import session_service

SECRET = "unit-test-secret"


@pytest.fixture
def app():
    app = Flask(__name__)
    app.config.update(
        JWT_SECRET_KEY=SECRET,
        JWT_EXPIRES=timedelta(days=7),
        JWT_ALGORITHM="HS256",
        TOKEN_COOKIE_NAME="token",
        TOKEN_COOKIE_SECURE=False,
        TOKEN_COOKIE_SAMESITE=None,
    )
    with app.app_context():
        yield app


def _user():
    return SimpleNamespace(id=7, username="alice", email="alice@example.com")


def test_issue_embeds_session_user(app):
    token = session_service.issue(_user())
    payload = jwt.decode(token, SECRET, algorithms=["HS256"])

    assert payload["data"] == {"id": 7, "username": "alice", "email": "alice@example.com"}
    assert payload["exp"] - payload["iat"] == int(timedelta(days=7).total_seconds())


def test_resolve_reloads_user(app):
    session = MagicMock()
    session.get.return_value = _user()

    user = session_service.resolve(session_service.issue(_user()), session)

    assert user.id == 7
    assert session.get.call_args.args[1] == 7


@pytest.mark.parametrize("token", [None, "", "not-a-jwt"])
def test_resolve_rejects_missing_or_malformed(app, token):
    session = MagicMock()
    assert session_service.resolve(token, session) is None
    session.get.assert_not_called()


def test_resolve_rejects_wrong_signature(app):
    forged = jwt.encode({"data": {"id": 7}}, "someone-else", algorithm="HS256")
    assert session_service.resolve(forged, MagicMock()) is None


def test_resolve_rejects_expired(app):
    past = datetime.now(timezone.utc) - timedelta(days=1)
    expired = jwt.encode(
        {"data": {"id": 7}, "iat": past - timedelta(days=7), "exp": past},
        SECRET,
        algorithm="HS256",
    )
    assert session_service.resolve(expired, MagicMock()) is None


def test_resolve_rejects_payload_without_user_id(app):
    token = jwt.encode({"data": {"username": "alice"}}, SECRET, algorithm="HS256")
    assert session_service.resolve(token, MagicMock()) is None


def test_resolve_returns_none_for_deleted_user(app):
    session = MagicMock()
    session.get.return_value = None
    assert session_service.resolve(session_service.issue(_user()), session) is None


def test_token_cookie_is_http_only(app):
    response = app.response_class()
    session_service.set_token_cookie(response, "abc")

    header = response.headers["Set-Cookie"]
    assert header.startswith("token=abc;")
    assert "HttpOnly" in header
    assert "Max-Age=604800" in header


def test_clear_token_cookie_expires_it(app):
    response = app.response_class()
    session_service.clear_token_cookie(response)

    header = response.headers["Set-Cookie"]
    assert header.startswith("token=;")
    assert "Max-Age=0" in header
