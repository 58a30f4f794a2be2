"""
models/cafe.py — Cafe table definition.

FK policy: owner_id ON DELETE RESTRICT — a user who owns cafes cannot be
deleted. Reviews reference cafes with ON DELETE CASCADE (see review.py);
the service layer also removes them explicitly in the same transaction.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from backend.app.extensions import db
from backend.app.models.user import _utcnow


class Cafe(db.Model):
    __tablename__ = "cafes"

    __table_args__ = (
        CheckConstraint("LENGTH(TRIM(title)) > 0", name="ck_cafes_title_nonempty"),
        CheckConstraint("LENGTH(TRIM(img)) > 0", name="ck_cafes_img_nonempty"),
        CheckConstraint("LENGTH(TRIM(zip_code)) > 0", name="ck_cafes_zip_nonempty"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)

    owner_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )

    title: Mapped[str] = mapped_column(String(80), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    img: Mapped[str] = mapped_column(String(2048), nullable=False)
    address: Mapped[str] = mapped_column(String(255), nullable=False)
    city: Mapped[str] = mapped_column(String(255), nullable=False)
    zip_code: Mapped[str] = mapped_column(String(10), nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        server_default=func.now(),
        index=True,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow,
        server_default=func.now(),
    )

    # ── Relationships ──────────────────────────────────────────────────────

    owner: Mapped["User"] = relationship(  # noqa: F821
        "User",
        back_populates="cafes",
    )

    reviews: Mapped[list["Review"]] = relationship(  # noqa: F821
        "Review",
        back_populates="cafe",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:  # pragma: no cover
        return f"<Cafe id={self.id} title={self.title!r}>"
