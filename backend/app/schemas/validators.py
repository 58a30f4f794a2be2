"""
schemas/validators.py — Field validators shared by several schemas.

The database CHECK constraints measure text after TRIM, so the schemas
apply the same rule before anything reaches a flush.
"""

from __future__ import annotations

from marshmallow import ValidationError


BLANK_MESSAGE = "This field must not be blank or contain only whitespace."


def validate_non_empty_after_trim(value: str) -> None:
    """Rejects blank or whitespace-only strings."""
    if not value.strip():
        raise ValidationError(BLANK_MESSAGE)


class TrimmedLength:
    """
    Length check where the minimum is measured after stripping whitespace
    and the maximum on the raw value (the column width).
    """

    def __init__(self, min: int, max: int | None = None, error: str = "Invalid length."):
        self.min = min
        self.max = max
        self.error = error

    def __call__(self, value: str) -> str:
        if len(value.strip()) < self.min:
            raise ValidationError(self.error)
        if self.max is not None and len(value) > self.max:
            raise ValidationError(self.error)
        return value
