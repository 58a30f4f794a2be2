"""
errors.py — AppError base class and error code registry.

Every error returned by the Cafe Directory API uses a code defined here.
Do not raise strings or generic exceptions from service or route code.

Response envelope (shared by every error, see app/__init__.py):

    {"title": "...", "message": "...", "errors": ["..."], "code": "..."}

Rules:
  - New error codes require: add constant here + add a test.
  - Error codes are a contract. Titles and messages may be reworded.
  - Never conflate 401 (unauthenticated) with 403 (not the owner).
"""

from __future__ import annotations


class AppError(Exception):

    def __init__(
            self,
            code: str,
            title: str,
            http_status: int,
            errors: list[str] | None = None,
            message: str | None = None,
    ) -> None:
        super().__init__(message or title)
        self.code        = code
        self.title       = title
        self.http_status = http_status
        self.errors      = list(errors) if errors else [title]
        self.message     = message or title

    def to_dict(self) -> dict:
        return {
            "title":   self.title,
            "message": self.message,
            "errors":  self.errors,
            "code":    self.code,
        }

    def __repr__(self) -> str:
        return (
            f"AppError(code={self.code!r}, "
            f"http_status={self.http_status}, "
            f"title={self.title!r})"
        )


# ── Error Code Registry ────────────────────────────────────────────────────
#
# IMPORTANT: these are the string values sent in the API response.
# ──────────────────────────────────────────────────────────────────────────

class ErrorCode:

    # ── Input Errors (422) ─────────────────────────────────────────────────
    VALIDATION_ERROR   = "VALIDATION_ERROR"
    DUPLICATE_USERNAME = "DUPLICATE_USERNAME"
    DUPLICATE_EMAIL    = "DUPLICATE_EMAIL"

    # ── Not Found Errors (404) ─────────────────────────────────────────────
    CAFE_NOT_FOUND     = "CAFE_NOT_FOUND"
    REVIEW_NOT_FOUND   = "REVIEW_NOT_FOUND"

    # ── Auth Errors ────────────────────────────────────────────────────────
    # 401 = we do not know who you are
    # 403 = we know who you are, but the record is not yours
    UNAUTHORIZED       = "UNAUTHORIZED"       # 401
    LOGIN_FAILED       = "LOGIN_FAILED"       # 401
    FORBIDDEN          = "FORBIDDEN"          # 403
    CSRF_INVALID       = "CSRF_INVALID"       # 403

    # ── System Errors (500) ────────────────────────────────────────────────
    INTERNAL_ERROR     = "INTERNAL_ERROR"


# ── Factories ──────────────────────────────────────────────────────────────
# Keep titles/messages for the common cases in one place so routes, services
# and tests agree on the exact wording.

def cafe_not_found(cafe_id: int) -> AppError:
    return AppError(
        ErrorCode.CAFE_NOT_FOUND,
        "Cafe not found.",
        404,
        errors=[f"Cafe with id of {cafe_id} could not be found."],
        message="Cafe not found",
    )


def review_not_found(review_id: int) -> AppError:
    return AppError(
        ErrorCode.REVIEW_NOT_FOUND,
        "Review not found.",
        404,
        errors=[f"Review with id of {review_id} could not be found."],
        message="Review not found",
    )


def unauthorized() -> AppError:
    return AppError(
        ErrorCode.UNAUTHORIZED,
        "Unauthorized",
        401,
        errors=["Unauthorized"],
    )


def login_failed() -> AppError:
    # Same error for unknown credential and wrong password.
    return AppError(
        ErrorCode.LOGIN_FAILED,
        "Login failed",
        401,
        errors=["The provided credentials were invalid."],
    )


def forbidden(detail: str) -> AppError:
    return AppError(
        ErrorCode.FORBIDDEN,
        "Forbidden",
        403,
        errors=[detail],
    )


def validation_failed(messages: list[str]) -> AppError:
    return AppError(
        ErrorCode.VALIDATION_ERROR,
        "Bad request.",
        422,
        errors=messages,
        message="Validation error",
    )
