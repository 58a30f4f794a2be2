"""
schemas/review_schema.py — Marshmallow schema for review creation.

The cafe's existence (REVIEW target) and the author check are service
concerns (services/review_service.py).
"""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate

from backend.app.schemas.validators import validate_non_empty_after_trim


class CreateReviewSchema(Schema):
    """POST /api/reviews/new"""

    class Meta:
        unknown = EXCLUDE

    cafe_id = fields.Int(
        required=True,
        data_key="businessId",
        strict=True,
        validate=validate.Range(min=1, error="businessId must be a positive integer."),
    )

    answer = fields.Str(
        required=True,
        validate=[
            validate.Length(
                min=5,
                error="Please provide the review with at least 5 characters.",
            ),
            validate_non_empty_after_trim,
        ],
    )

    # Optional: when present it must match the session user.
    user_id = fields.Int(
        data_key="userId",
        strict=True,
        validate=validate.Range(min=1, error="userId must be a positive integer."),
    )
