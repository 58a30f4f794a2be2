"""
frontend/tests/conftest.py — Store fixtures wired to a real API.

The Flask app runs in-process behind httpx.WSGITransport, so the whole
client path (CsrfFetch → cookies → CSRF header → routes → SQLite) is
exercised without a network socket.
"""

from __future__ import annotations

import httpx
import pytest
from sqlalchemy import text

from backend.app import create_app
from backend.app.extensions import db as _db
from frontend.csrf import CsrfFetch
from frontend.store import configure_store

BASE_URL = "http://testserver"


@pytest.fixture(scope="session")
def app():
    flask_app = create_app("testing")
    with flask_app.app_context():
        _db.create_all()

    yield flask_app

    with flask_app.app_context():
        _db.drop_all()


@pytest.fixture(autouse=True)
def clean_tables(request):
    """Deletes all rows after tests that touched the API."""
    yield

    if "app" not in request.fixturenames:
        return
    flask_app = request.getfixturevalue("app")
    with flask_app.app_context():
        _db.session.rollback()
        _db.session.execute(text("DELETE FROM reviews"))
        _db.session.execute(text("DELETE FROM cafes"))
        _db.session.execute(text("DELETE FROM users"))
        _db.session.commit()


def make_fetch(app) -> CsrfFetch:
    return CsrfFetch(BASE_URL, transport=httpx.WSGITransport(app=app))


@pytest.fixture
def fetch(app):
    client = make_fetch(app)
    yield client
    client.close()


@pytest.fixture
def store(fetch):
    return configure_store(fetch)


@pytest.fixture
def other_store(app):
    """A second user's client, with its own cookie jar."""
    client = make_fetch(app)
    yield configure_store(client)
    client.close()


CAFE = {
    "title": "Blue Bottle",
    "description": "Single-origin pour-over in a sunny loft.",
    "img": "https://images.example.com/blue-bottle.jpg",
    "address": "450 W 15th Street",
    "city": "New York",
    "zipCode": "10011",
}
