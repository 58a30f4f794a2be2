"""
schemas/auth_schema.py — Marshmallow schemas for signup and login.

Validation responsibility:
  - This file: field types, lengths, formats.
  - services/auth_service.py: DUPLICATE_USERNAME / DUPLICATE_EMAIL checks
    (require a DB lookup — not a schema concern).

IMPORTANT: All schemas inherit from marshmallow.Schema directly.
           Do NOT use ma.Schema — it requires an active Flask app context
           and breaks unit tests. See extensions.py.
"""

from __future__ import annotations

from marshmallow import Schema, ValidationError, fields, validate, validates

from backend.app.schemas.validators import TrimmedLength


_email_validator = validate.Email()

_USERNAME_LENGTH = "Please provide a username with at least 3 and at most 30 characters."


class SignupSchema(Schema):
    """
    POST /api/users

    Field rules:
      username : 3–30 chars (at least 3 after trimming), must not be an e-mail address
      email    : valid e-mail, 3–256 chars
      password : min 6 chars
    """

    username = fields.Str(
        required=True,
        validate=TrimmedLength(min=3, max=30, error=_USERNAME_LENGTH),
    )

    email = fields.Email(
        required=True,
        validate=validate.Length(
            min=3,
            max=256,
            error="Please provide a valid email.",
        ),
        error_messages={"invalid": "Please provide a valid email."},
    )

    password = fields.Str(
        required=True,
        load_only=True,
        validate=validate.Length(
            min=6,
            error="Password must be 6 characters or more.",
        ),
    )

    @validates("username")
    def validate_username_not_email(self, value: str, **kwargs) -> None:
        try:
            _email_validator(value)
        except ValidationError:
            return
        raise ValidationError("Username cannot be an email.")


class LoginSchema(Schema):
    """
    POST /api/session

    `credential` is either a username or an e-mail. Correctness is checked
    in auth_service.verify (LOGIN_FAILED, 401).
    """

    credential = fields.Str(
        required=True,
        validate=validate.Length(min=1, error="Please provide a valid email or username."),
        error_messages={"required": "Please provide a valid email or username."},
    )
    password = fields.Str(
        required=True,
        load_only=True,
        validate=validate.Length(min=1, error="Please provide a password."),
        error_messages={"required": "Please provide a password."},
    )
