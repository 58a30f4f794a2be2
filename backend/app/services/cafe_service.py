"""
services/cafe_service.py — Cafe business logic.

Authorization rules:
  - Create: any authenticated user; the caller becomes the owner.
            An explicit ownerId in the body must equal the caller.
  - Update: owner only (FORBIDDEN, 403)
  - Delete: owner only (FORBIDDEN, 403). Removes the cafe's reviews in the
            same transaction.

Layer rules:
  - No Flask imports. Receives plain ints and dicts; returns ORM objects or
    raises AppError.
  - Commits are the route's responsibility — only flush here.
"""

from __future__ import annotations

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from backend.app.errors import cafe_not_found, forbidden
from backend.app.models.cafe import Cafe
from backend.app.models.review import Review


MUTABLE_FIELDS = ("title", "description", "img", "address", "city", "zip_code")


# ── Private helpers ────────────────────────────────────────────────────────

def _get_cafe_or_404(cafe_id: int, session: Session) -> Cafe:
    """Returns the Cafe or raises CAFE_NOT_FOUND (404)."""
    cafe = session.get(Cafe, cafe_id)
    if cafe is None:
        raise cafe_not_found(cafe_id)
    return cafe


def _require_owner(cafe: Cafe, caller_id: int) -> None:
    if cafe.owner_id != caller_id:
        raise forbidden(f"Cafe {cafe.id} does not belong to you.")


# ── Public service functions ───────────────────────────────────────────────

def list_cafes(session: Session) -> list[Cafe]:
    """All cafes, newest first."""
    stmt = select(Cafe).order_by(Cafe.created_at.desc(), Cafe.id.desc())
    return list(session.execute(stmt).scalars().all())


def get_cafe(cafe_id: int, session: Session) -> Cafe:
    return _get_cafe_or_404(cafe_id, session)


def create_cafe(caller_id: int, data: dict, session: Session) -> Cafe:
    """
    Creates a cafe owned by `caller_id`.

    Raises:
      AppError(FORBIDDEN, 403) — data["owner_id"] names someone else
    """
    owner_id = data.get("owner_id", caller_id)
    if owner_id != caller_id:
        raise forbidden("You may only create cafes for yourself.")

    cafe = Cafe(
        owner_id=caller_id,
        **{name: data[name] for name in MUTABLE_FIELDS},
    )
    session.add(cafe)
    session.flush()
    return cafe


def update_cafe(cafe_id: int, caller_id: int, data: dict, session: Session) -> Cafe:
    """
    Applies the provided subset of mutable fields.

    Raises:
      AppError(CAFE_NOT_FOUND, 404)
      AppError(FORBIDDEN, 403) — caller is not the owner
    """
    cafe = _get_cafe_or_404(cafe_id, session)
    _require_owner(cafe, caller_id)

    for name in MUTABLE_FIELDS:
        if name in data:
            setattr(cafe, name, data[name])

    session.flush()
    return cafe


def delete_cafe(cafe_id: int, caller_id: int, session: Session) -> None:
    """
    Deletes a cafe and every review that references it.

    Both statements run in the caller's transaction, so the route's single
    commit applies them together.

    Raises:
      AppError(CAFE_NOT_FOUND, 404)
      AppError(FORBIDDEN, 403) — caller is not the owner
    """
    cafe = _get_cafe_or_404(cafe_id, session)
    _require_owner(cafe, caller_id)

    session.execute(delete(Review).where(Review.cafe_id == cafe_id))
    session.expire(cafe, ["reviews"])
    session.delete(cafe)
    session.flush()
