"""
routes/reviews.py — Review route handlers.

Endpoints (url_prefix=/api/reviews):
  GET    /api/reviews/cafes/:businessId → 200 {"answers": [...]}  newest first
  POST   /api/reviews/new               → 200 review               (session)
  GET    /api/reviews/:id               → 200 {"answer": {...}}
  DELETE /api/reviews/:id               → 204                      (author)
"""

from __future__ import annotations

from flask import Blueprint, g, jsonify, request

from backend.app.extensions import db
from backend.app.middleware.auth_middleware import require_session
from backend.app.models.review import Review
from backend.app.schemas.review_schema import CreateReviewSchema
from backend.app.services import review_service
from backend.app.services.auth_service import public_user

reviews_bp = Blueprint("reviews", __name__)


def _serialize_review(review: Review) -> dict:
    return {
        "id": review.id,
        "userId": review.user_id,
        "businessId": review.cafe_id,
        "author": public_user(review.author) if review.author else None,
        "answer": review.answer,
        "createdAt": review.created_at.isoformat(),
        "updatedAt": review.updated_at.isoformat() if review.updated_at else None,
    }


@reviews_bp.route("/cafes/<int:cafe_id>", methods=["GET"])
def list_reviews(cafe_id: int):
    """GET /api/reviews/cafes/:businessId — Reviews of one cafe."""
    reviews = review_service.list_reviews_for_cafe(cafe_id=cafe_id, session=db.session)
    return jsonify({"answers": [_serialize_review(r) for r in reviews]}), 200


@reviews_bp.route("/new", methods=["POST"])
@require_session
def create_review():
    """POST /api/reviews/new — Review a cafe as the session user."""
    data = CreateReviewSchema().load(request.get_json(force=True, silent=True) or {})
    review = review_service.create_review(
        caller_id=g.user.id,
        data=data,
        session=db.session,
    )
    db.session.commit()
    return jsonify(_serialize_review(review)), 200


@reviews_bp.route("/<int:review_id>", methods=["GET"])
def get_review(review_id: int):
    review = review_service.get_review(review_id=review_id, session=db.session)
    return jsonify({"answer": _serialize_review(review)}), 200


@reviews_bp.route("/<int:review_id>", methods=["DELETE"])
@require_session
def delete_review(review_id: int):
    """DELETE /api/reviews/:id — Author only."""
    review_service.delete_review(
        review_id=review_id,
        caller_id=g.user.id,
        session=db.session,
    )
    db.session.commit()
    return jsonify({"message": "success"}), 204
