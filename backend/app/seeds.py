"""
seeds.py — Demo data for local development.

    flask --app backend.wsgi seed          # insert demo rows (idempotent)
    flask --app backend.wsgi seed --reset  # drop + recreate tables first
"""

from __future__ import annotations

import click
from flask import current_app
from flask.cli import with_appcontext
from sqlalchemy import select

from backend.app.extensions import db
from backend.app.models.cafe import Cafe
from backend.app.models.review import Review
from backend.app.models.user import User
from backend.app.services import auth_service


DEMO_USERNAME = "Demo-lition"
DEMO_EMAIL = "demo@user.io"
DEMO_PASSWORD = "password"

DEMO_CAFES = [
    {
        "title": "Ben & Jerry",
        "description": "Lower East Side Your Pet Friendly Cafe",
        "img": (
            "https://images.unsplash.com/photo-1536783006430-a4134d1c4748"
            "?auto=format&fit=crop&w=1770&q=80"
        ),
        "address": "15 hudson yards",
        "city": "New York",
        "zip_code": "10001",
    },
]

DEMO_REVIEWS = ["Dope Dope Dope"]


def seed_demo_data() -> User:
    """Inserts the demo user, cafes and reviews unless they already exist."""
    session = db.session
    user = session.execute(
        select(User).where(User.username == DEMO_USERNAME)
    ).scalar_one_or_none()

    if user is None:
        user = auth_service.signup(DEMO_USERNAME, DEMO_EMAIL, DEMO_PASSWORD, session)

    for data in DEMO_CAFES:
        exists = session.execute(
            select(Cafe).where(Cafe.owner_id == user.id, Cafe.title == data["title"])
        ).scalar_one_or_none()
        if exists is not None:
            continue
        cafe = Cafe(owner_id=user.id, **data)
        session.add(cafe)
        session.flush()
        for answer in DEMO_REVIEWS:
            session.add(Review(user_id=user.id, cafe_id=cafe.id, answer=answer))

    session.commit()
    return user


@click.command("seed")
@click.option("--reset", is_flag=True, help="Drop and recreate all tables first.")
@with_appcontext
def seed_command(reset: bool) -> None:
    """Insert demo user, cafes and reviews."""
    if reset:
        db.drop_all()
    db.create_all()
    user = seed_demo_data()
    current_app.logger.info("Seeded demo data for user %s.", user.username)
    click.echo(f"Seeded demo data. Log in as {DEMO_USERNAME} / {DEMO_PASSWORD}.")
