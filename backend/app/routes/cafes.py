"""
routes/cafes.py — Cafe route handlers.

Layer rules:
  - Parse, validate, call ONE service, commit, return JSON.
  - No business logic. No DB queries.
  - _serialize_cafe() is a pure data-shape helper.

Endpoints (url_prefix=/api/cafes):
  GET    /api/cafes        → 200 {"cafe": [...]}   newest first
  POST   /api/cafes/new    → 200 cafe              (session)
  GET    /api/cafes/:id    → 200 {"cafe": {...}}
  PUT    /api/cafes/:id    → 200 {"cafe": {...}}   (owner)
  DELETE /api/cafes/:id    → 204                   (owner; cascades to reviews)
"""

from __future__ import annotations

from flask import Blueprint, g, jsonify, request

from backend.app.extensions import db
from backend.app.middleware.auth_middleware import require_session
from backend.app.models.cafe import Cafe
from backend.app.schemas.cafe_schema import CafeSchema
from backend.app.services import cafe_service
from backend.app.services.auth_service import public_user

cafes_bp = Blueprint("cafes", __name__)


def _serialize_cafe(cafe: Cafe) -> dict:
    """Converts a Cafe ORM object to a plain dict for JSON output."""
    return {
        "id": cafe.id,
        "ownerId": cafe.owner_id,
        "owner": public_user(cafe.owner) if cafe.owner else None,
        "title": cafe.title,
        "description": cafe.description,
        "img": cafe.img,
        "address": cafe.address,
        "city": cafe.city,
        "zipCode": cafe.zip_code,
        "createdAt": cafe.created_at.isoformat(),
        "updatedAt": cafe.updated_at.isoformat() if cafe.updated_at else None,
    }


@cafes_bp.route("", methods=["GET"])
def list_cafes():
    """GET /api/cafes — Every cafe, newest first."""
    cafes = cafe_service.list_cafes(session=db.session)
    return jsonify({"cafe": [_serialize_cafe(c) for c in cafes]}), 200


@cafes_bp.route("/new", methods=["POST"])
@require_session
def create_cafe():
    """POST /api/cafes/new — Create a cafe owned by the session user."""
    data = CafeSchema().load(request.get_json(force=True, silent=True) or {})
    cafe = cafe_service.create_cafe(
        caller_id=g.user.id,
        data=data,
        session=db.session,
    )
    db.session.commit()
    return jsonify(_serialize_cafe(cafe)), 200


@cafes_bp.route("/<int:cafe_id>", methods=["GET"])
def get_cafe(cafe_id: int):
    """GET /api/cafes/:id"""
    cafe = cafe_service.get_cafe(cafe_id=cafe_id, session=db.session)
    return jsonify({"cafe": _serialize_cafe(cafe)}), 200


@cafes_bp.route("/<int:cafe_id>", methods=["PUT"])
@require_session
def update_cafe(cafe_id: int):
    """PUT /api/cafes/:id — Partial update. Owner only."""
    data = CafeSchema(partial=True).load(request.get_json(force=True, silent=True) or {})
    cafe = cafe_service.update_cafe(
        cafe_id=cafe_id,
        caller_id=g.user.id,
        data=data,
        session=db.session,
    )
    db.session.commit()
    return jsonify({"cafe": _serialize_cafe(cafe)}), 200


@cafes_bp.route("/<int:cafe_id>", methods=["DELETE"])
@require_session
def delete_cafe(cafe_id: int):
    """DELETE /api/cafes/:id — Delete the cafe and its reviews. Owner only."""
    cafe_service.delete_cafe(
        cafe_id=cafe_id,
        caller_id=g.user.id,
        session=db.session,
    )
    db.session.commit()
    return jsonify({"message": "success"}), 204
