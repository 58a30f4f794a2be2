"""
schemas/cafe_schema.py — Marshmallow schemas for cafe endpoints.

Wire names are camelCase (zipCode, ownerId); loaded keys are snake_case so
services receive plain model column names.

Ownership (ownerId must equal the session user) is checked in
services/cafe_service.py, not here.
"""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate

from backend.app.schemas.validators import validate_non_empty_after_trim


class CafeSchema(Schema):
    """
    POST /api/cafes/new  (full)
    PUT  /api/cafes/:id  (load with partial=True)
    """

    class Meta:
        # Clients send back whole records (id, createdAt, ...).
        unknown = EXCLUDE

    title = fields.Str(
        required=True,
        validate=[
            validate.Length(
                min=4,
                max=80,
                error="Please provide a title with at least 4 characters.",
            ),
            validate_non_empty_after_trim,
        ],
    )

    description = fields.Str(
        required=True,
        validate=[
            validate.Length(min=10, error="Please provide a description with at least 10 characters."),
            validate_non_empty_after_trim,
        ],
    )

    # Absolute or site-relative image URL.
    img = fields.Url(
        required=True,
        relative=True,
        require_tld=False,
        error_messages={"invalid": "Please provide a valid image URL."},
        validate=validate.Length(max=2048),
    )

    address = fields.Str(
        required=True,
        validate=[
            validate.Length(min=10, max=255, error="Please provide an address with at least 10 characters."),
            validate_non_empty_after_trim,
        ],
    )

    city = fields.Str(
        required=True,
        validate=[
            validate.Length(min=4, max=255, error="Please provide a city with at least 4 characters."),
            validate_non_empty_after_trim,
        ],
    )

    zip_code = fields.Str(
        required=True,
        data_key="zipCode",
        validate=validate.Regexp(
            r"^\d{5}(-\d{4})?$",
            error="Please provide a 5-digit zip code.",
        ),
    )

    # Optional: when present it must match the session user.
    owner_id = fields.Int(
        data_key="ownerId",
        strict=True,
        validate=validate.Range(min=1, error="ownerId must be a positive integer."),
    )
