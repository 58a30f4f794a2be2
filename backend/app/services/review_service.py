"""
services/review_service.py — Review business logic.

Authorization rules:
  - Create: any authenticated user; the caller becomes the author.
            The target cafe must exist (CAFE_NOT_FOUND, 404).
  - Delete: author only (FORBIDDEN, 403)

Layer rules:
  - No Flask imports. Commits are the route's responsibility.
"""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from backend.app.errors import cafe_not_found, forbidden, review_not_found
from backend.app.models.cafe import Cafe
from backend.app.models.review import Review


def _get_review_or_404(review_id: int, session: Session) -> Review:
    """Returns the Review or raises REVIEW_NOT_FOUND (404)."""
    review = session.get(Review, review_id)
    if review is None:
        raise review_not_found(review_id)
    return review


def list_reviews_for_cafe(cafe_id: int, session: Session) -> list[Review]:
    """
    Reviews of one cafe, newest first.

    An unknown cafe yields an empty list (a deleted cafe has no reviews).
    """
    stmt = (
        select(Review)
        .where(Review.cafe_id == cafe_id)
        .order_by(Review.created_at.desc(), Review.id.desc())
    )
    return list(session.execute(stmt).scalars().all())


def get_review(review_id: int, session: Session) -> Review:
    return _get_review_or_404(review_id, session)


def create_review(caller_id: int, data: dict, session: Session) -> Review:
    """
    Raises:
      AppError(FORBIDDEN, 403)      — data["user_id"] names someone else
      AppError(CAFE_NOT_FOUND, 404) — target cafe does not exist
    """
    author_id = data.get("user_id", caller_id)
    if author_id != caller_id:
        raise forbidden("You may only post reviews as yourself.")

    cafe_id = data["cafe_id"]
    if session.get(Cafe, cafe_id) is None:
        raise cafe_not_found(cafe_id)

    review = Review(
        user_id=caller_id,
        cafe_id=cafe_id,
        answer=data["answer"],
    )
    session.add(review)
    session.flush()
    return review


def delete_review(review_id: int, caller_id: int, session: Session) -> None:
    """
    Raises:
      AppError(REVIEW_NOT_FOUND, 404)
      AppError(FORBIDDEN, 403) — caller is not the author
    """
    review = _get_review_or_404(review_id, session)
    if review.user_id != caller_id:
        raise forbidden(f"Review {review_id} does not belong to you.")

    session.delete(review)
    session.flush()
