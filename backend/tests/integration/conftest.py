"""
tests/integration/conftest.py — Fixtures and helpers for all integration tests.

Design:
  - The app is created once per session using create_app("testing")
    (in-memory SQLite unless TEST_DATABASE_URL points elsewhere).
  - All tables are created once via db.create_all() at session start.
  - Between tests, all rows are deleted in FK-safe order so tests are isolated.
  - CSRF protection stays ON: every mutating helper sends the X-CSRF-Token
    header obtained from GET /api/csrf/restore, exactly like a real client.

Helper functions (not fixtures) are provided for common operations:
  - csrf_headers(client)        → {"X-CSRF-Token": "..."}
  - signup(client, ...)         → session user dict; client now holds the token cookie
  - login(client, ...)          → HTTP response
  - logout(client)              → HTTP response
  - make_cafe(client, ...)      → HTTP response
  - make_review(client, ...)    → HTTP response
"""

from __future__ import annotations

import pytest
from sqlalchemy import text

from backend.app import create_app
from backend.app.extensions import db as _db


# ═══════════════════════════════════════════════════════════════════════════
# Session-scoped app fixture
# ═══════════════════════════════════════════════════════════════════════════

@pytest.fixture(scope="session")
def app():
    """Creates the Flask application in 'testing' mode once per test session."""
    flask_app = create_app("testing")

    with flask_app.app_context():
        _db.create_all()

    yield flask_app

    with flask_app.app_context():
        _db.drop_all()


# ═══════════════════════════════════════════════════════════════════════════
# Function-scoped test isolation
# ═══════════════════════════════════════════════════════════════════════════

@pytest.fixture(autouse=True)
def clean_tables(app):
    """Deletes all rows after every test, children first."""
    yield

    with app.app_context():
        _db.session.rollback()  # discard any uncommitted state from a failed test
        _db.session.execute(text("DELETE FROM reviews"))
        _db.session.execute(text("DELETE FROM cafes"))
        _db.session.execute(text("DELETE FROM users"))
        _db.session.commit()


# ═══════════════════════════════════════════════════════════════════════════
# Client fixture
# ═══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def client(app):
    """Flask test client. Each test gets a fresh cookie jar."""
    return app.test_client()


@pytest.fixture
def other_client(app):
    """A second browser, for ownership tests."""
    return app.test_client()


# ═══════════════════════════════════════════════════════════════════════════
# Shared helper functions (not fixtures)
# ═══════════════════════════════════════════════════════════════════════════

def csrf_headers(client) -> dict:
    """Fetches a CSRF token (sets XSRF-TOKEN + session cookies) and returns the header."""
    resp = client.get("/api/csrf/restore")
    assert resp.status_code == 200
    return {"X-CSRF-Token": resp.get_json()["XSRF-Token"]}


def signup(
    client,
    username: str = "alice",
    email: str | None = None,
    password: str = "secret123",
) -> dict:
    """Signs up a user and returns the session user dict."""
    if email is None:
        email = f"{username}@test.com"
    resp = client.post(
        "/api/users",
        json={"username": username, "email": email, "password": password},
        headers=csrf_headers(client),
    )
    assert resp.status_code == 200, f"signup failed: {resp.get_json()}"
    return resp.get_json()["user"]


def login(client, credential: str, password: str = "secret123"):
    return client.post(
        "/api/session",
        json={"credential": credential, "password": password},
        headers=csrf_headers(client),
    )


def logout(client):
    return client.delete("/api/session", headers=csrf_headers(client))


def cafe_payload(**overrides) -> dict:
    payload = {
        "title": "Blue Bottle",
        "description": "Single-origin pour-over in a sunny loft.",
        "img": "https://images.example.com/blue-bottle.jpg",
        "address": "450 W 15th Street",
        "city": "New York",
        "zipCode": "10011",
    }
    payload.update(overrides)
    return payload


def make_cafe(client, **overrides):
    return client.post(
        "/api/cafes/new",
        json=cafe_payload(**overrides),
        headers=csrf_headers(client),
    )


def make_review(client, cafe_id: int, answer: str = "Great flat white."):
    return client.post(
        "/api/reviews/new",
        json={"businessId": cafe_id, "answer": answer},
        headers=csrf_headers(client),
    )


def token_cookie_cleared(resp) -> bool:
    """True when the response deletes the session cookie."""
    return any(
        header.startswith("token=;")
        for header in resp.headers.getlist("Set-Cookie")
    )
