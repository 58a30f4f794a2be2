"""
models/review.py — Review table definition.

FK policy:
  cafe_id ON DELETE CASCADE  — reviews are owned by their cafe.
  user_id ON DELETE RESTRICT — authors cannot be deleted while reviews exist.

cafe_id travels on the wire as "businessId".
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from backend.app.extensions import db
from backend.app.models.user import _utcnow


class Review(db.Model):
    __tablename__ = "reviews"

    __table_args__ = (
        CheckConstraint("LENGTH(TRIM(answer)) > 0", name="ck_reviews_answer_nonempty"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )

    cafe_id: Mapped[int] = mapped_column(
        ForeignKey("cafes.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    answer: Mapped[str] = mapped_column(Text, nullable=False)

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

    author: Mapped["User"] = relationship(  # noqa: F821
        "User",
        back_populates="reviews",
    )

    cafe: Mapped["Cafe"] = relationship(  # noqa: F821
        "Cafe",
        back_populates="reviews",
    )

    def __repr__(self) -> str:  # pragma: no cover
        return (
            f"<Review id={self.id} "
            f"cafe_id={self.cafe_id} "
            f"user_id={self.user_id}>"
        )
