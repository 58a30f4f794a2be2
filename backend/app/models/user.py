"""
models/user.py — User table definition.

No business logic. No imports from services or routes.
The password is stored only as a bcrypt hash (60 chars); projections that
cross the API boundary live in services/auth_service.py.
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from backend.app.extensions import db


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(db.Model):
    __tablename__ = "users"

    __table_args__ = (
        # Also enforced by the marshmallow signup schema.
        CheckConstraint(
            "LENGTH(TRIM(username)) >= 3",
            name="ck_users_username_length",
        ),
        CheckConstraint(
            "email LIKE '%@%'",
            name="ck_users_email_format",
        ),
    )

    id: Mapped[int] = mapped_column(primary_key=True)

    username: Mapped[str] = mapped_column(
        String(30),
        nullable=False,
        unique=True,
    )

    email: Mapped[str] = mapped_column(
        String(256),
        nullable=False,
        unique=True,
    )

    # bcrypt output is always 60 characters.
    hashed_password: Mapped[str] = mapped_column(
        String(60),
        nullable=False,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        server_default=func.now(),
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow,
        server_default=func.now(),
    )

    # ── Relationships ──────────────────────────────────────────────────────

    cafes: Mapped[list["Cafe"]] = relationship(  # noqa: F821
        "Cafe",
        back_populates="owner",
    )

    reviews: Mapped[list["Review"]] = relationship(  # noqa: F821
        "Review",
        back_populates="author",
    )

    def __repr__(self) -> str:  # pragma: no cover
        return f"<User id={self.id} username={self.username!r}>"
