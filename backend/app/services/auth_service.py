"""
services/auth_service.py — Credential store business logic.

Responsibilities:
  - User signup (uniqueness checks, bcrypt hashing)
  - Credential verification by username OR e-mail
  - User projections that are allowed to cross the API boundary

Layer rules:
  - No imports from routes or schemas
  - No use of flask.request, flask.g, or HTTP status codes beyond AppError
  - current_app.config is read ONLY for BCRYPT_LOG_ROUNDS (stored hashes and
    the dummy hash checked for unknown credentials use the same cost)

Password storage:
  - Hashed with bcrypt (cost factor from config BCRYPT_LOG_ROUNDS, default 12)
  - Raw password is never stored, never logged
"""

from __future__ import annotations

import bcrypt
from flask import current_app
from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from backend.app.errors import AppError, ErrorCode
from backend.app.models.user import User


# Checked when no user matches, one per cost factor, so both failure paths
# pay for a bcrypt check at the configured cost.
_DUMMY_HASHES: dict[int, bytes] = {}


# ── Projections ────────────────────────────────────────────────────────────
# Each boundary gets its own explicit mapping. None of them include the hash.

def full_user(user: User) -> dict:
    """Every column except hashed_password."""
    return {
        "id": user.id,
        "username": user.username,
        "email": user.email,
        "createdAt": user.created_at.isoformat(),
        "updatedAt": user.updated_at.isoformat(),
    }


def session_user(user: User) -> dict:
    """Identity carried in the session token and returned by auth endpoints."""
    return {
        "id": user.id,
        "username": user.username,
        "email": user.email,
    }


def public_user(user: User) -> dict:
    """Listing view: no e-mail, no timestamps."""
    return {
        "id": user.id,
        "username": user.username,
    }


def sanitize(user: User) -> dict:
    return session_user(user)


# ── Private helpers ────────────────────────────────────────────────────────

def _hash_password(password: str) -> str:
    rounds = current_app.config.get("BCRYPT_LOG_ROUNDS", 12)
    return bcrypt.hashpw(
        password.encode("utf-8"),
        bcrypt.gensalt(rounds=rounds),
    ).decode("utf-8")


def _dummy_hash() -> bytes:
    rounds = current_app.config.get("BCRYPT_LOG_ROUNDS", 12)
    if rounds not in _DUMMY_HASHES:
        _DUMMY_HASHES[rounds] = bcrypt.hashpw(
            b"cafe-directory-dummy",
            bcrypt.gensalt(rounds=rounds),
        )
    return _DUMMY_HASHES[rounds]


def _duplicate(code: str, message: str) -> AppError:
    return AppError(code, "Bad request.", 422, errors=[message], message="Validation error")


# ── Public service functions ───────────────────────────────────────────────

def signup(
        username: str,
        email: str,
        password: str,
        session: Session,
) -> User:
    """
    Creates a new user account.

    Raises:
      AppError(DUPLICATE_USERNAME, 422) — username already taken
      AppError(DUPLICATE_EMAIL, 422)    — email already registered

    Returns the new User (flushed, id populated). Commit is the route's job.
    """
    existing_username = session.execute(
        select(User).where(User.username == username)
    ).scalar_one_or_none()
    if existing_username is not None:
        raise _duplicate(ErrorCode.DUPLICATE_USERNAME, "Username is already taken.")

    existing_email = session.execute(
        select(User).where(User.email == email)
    ).scalar_one_or_none()
    if existing_email is not None:
        raise _duplicate(ErrorCode.DUPLICATE_EMAIL, "Email is already registered.")

    user = User(
        username=username,
        email=email,
        hashed_password=_hash_password(password),
    )
    session.add(user)
    try:
        session.flush()
    except IntegrityError:
        # Lost a race with a concurrent signup for the same username/email.
        session.rollback()
        raise _duplicate(ErrorCode.DUPLICATE_USERNAME, "Username or email is already taken.")

    return user


def verify(credential: str, password: str, session: Session) -> User | None:
    """
    Returns the User whose username or e-mail equals `credential` when the
    password matches, otherwise None. Callers cannot tell an unknown
    credential from a wrong password.
    """
    user = session.execute(
        select(User).where(
            or_(User.username == credential, User.email == credential)
        )
    ).scalars().first()

    if user is None:
        bcrypt.checkpw(password.encode("utf-8"), _dummy_hash())
        return None

    if not bcrypt.checkpw(
            password.encode("utf-8"),
            user.hashed_password.encode("utf-8"),
    ):
        return None

    return user


def get_user(user_id: int, session: Session) -> User | None:
    """Returns the User or None. Used by the session middleware."""
    return session.get(User, user_id)
