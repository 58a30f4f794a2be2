"""
app/__init__.py — Flask application factory.

Pattern: create_app(config_name) creates and returns a configured Flask app.
         Nothing is initialised at import time — this enables:
           - Multiple isolated test app instances
           - Clean separation between app creation and app startup
           - `flask db` / alembic to work without starting the full server

Responsibilities:
  1. Load configuration from config_by_name[config_name]
  2. Initialise extensions (SQLAlchemy, Marshmallow, CSRFProtect)
  3. Install the session-cookie hooks (restore_user / clear_stale_cookie)
  4. Register all route blueprints under /api
  5. Register global error handlers (AppError, ValidationError, CSRFError,
     HTTPException, Exception) — every error leaves as the same envelope
  6. Register the `flask seed` CLI command

Note on model imports:
  All model classes are imported inside create_app() so that SQLAlchemy's
  metadata is populated before Alembic or create_all() inspects it.
"""

from __future__ import annotations

import traceback

from flask import Flask, jsonify, request
from flask_wtf.csrf import CSRFError
from marshmallow import ValidationError
from werkzeug.exceptions import HTTPException

from backend.config import config_by_name, validate_production_config


# ── Application factory ────────────────────────────────────────────────────

def create_app(config_name: str = "development") -> Flask:
    """
    Creates and returns a configured Flask application instance.

    Args:
        config_name: One of "development", "testing", "production".
                     Resolved via config_by_name in config.py.

    Returns:
        A fully configured Flask app ready to serve requests.
    """
    app = Flask(__name__)

    # ── Configuration ──────────────────────────────────────────────────────
    config_class = config_by_name.get(config_name, config_by_name["development"])
    app.config.from_object(config_class)

    if config_name == "production":
        validate_production_config(app)  # raises ValueError if misconfigured

    # ── Extensions ─────────────────────────────────────────────────────────
    # Imported here (not at module top) to avoid circular imports.
    from backend.app.extensions import csrf, db, ma
    db.init_app(app)
    ma.init_app(app)
    csrf.init_app(app)

    # ── Model registration ─────────────────────────────────────────────────
    with app.app_context():
        from backend.app.models import cafe, review, user  # noqa: F401

    # ── Session cookie hooks ───────────────────────────────────────────────
    from backend.app.middleware.auth_middleware import clear_stale_cookie, restore_user
    app.before_request(restore_user)
    app.after_request(clear_stale_cookie)

    _register_blueprints(app)
    _register_error_handlers(app)
    _register_cors(app)
    _register_commands(app)

    return app


def _register_blueprints(app: Flask) -> None:
    """
    Registers all route blueprints under the /api prefix.

    The url_prefix is set here so individual route files only specify
    the path relative to their resource (e.g. "" and "/<int:id>").
    """
    from backend.app.routes.cafes import cafes_bp
    from backend.app.routes.csrf import csrf_bp
    from backend.app.routes.reviews import reviews_bp
    from backend.app.routes.session import session_bp
    from backend.app.routes.users import users_bp

    app.register_blueprint(csrf_bp,    url_prefix="/api/csrf")
    app.register_blueprint(session_bp, url_prefix="/api/session")
    app.register_blueprint(users_bp,   url_prefix="/api/users")
    app.register_blueprint(cafes_bp,   url_prefix="/api/cafes")
    app.register_blueprint(reviews_bp, url_prefix="/api/reviews")


def _flatten_messages(messages, prefix: str | None = None) -> tuple[list[str], dict]:
    """
    Flattens marshmallow's nested messages into (list, {field: [msgs]}).

    {"title": ["Too short."], "_schema": ["..."]} →
      (["Too short.", "..."], {"title": ["Too short."]})
    """
    flat: list[str] = []
    by_field: dict[str, list[str]] = {}

    if isinstance(messages, dict):
        for name, value in messages.items():
            field = name if name != "_schema" else None
            if prefix and field:
                field = f"{prefix}.{field}"
            sub_flat, sub_fields = _flatten_messages(value, field)
            flat.extend(sub_flat)
            by_field.update(sub_fields)
    elif isinstance(messages, list):
        for item in messages:
            sub_flat, sub_fields = _flatten_messages(item, prefix)
            flat.extend(sub_flat)
            by_field.update(sub_fields)
    else:
        flat.append(str(messages))
        if prefix:
            by_field.setdefault(prefix, []).append(str(messages))

    return flat, by_field


def _register_error_handlers(app: Flask) -> None:
    """
    Registers global error handlers.

    Handlers:
      AppError        → envelope with the error's status
      ValidationError → 422 envelope listing every field message
      CSRFError       → 403 CSRF_INVALID
      HTTPException   → envelope with the exception's status (404 route, 405...)
      Exception       → 500 INTERNAL_ERROR; traceback logged, never returned
    """
    from backend.app.errors import AppError, ErrorCode, validation_failed

    @app.errorhandler(AppError)
    def handle_app_error(error: AppError):
        """Routes never catch AppError — they let it propagate here."""
        return jsonify(error.to_dict()), error.http_status

    @app.errorhandler(ValidationError)
    def handle_validation_error(error: ValidationError):
        messages, by_field = _flatten_messages(error.messages)
        body = validation_failed(messages or ["Invalid input."]).to_dict()
        body["fields"] = by_field
        return jsonify(body), 422

    @app.errorhandler(CSRFError)
    def handle_csrf_error(error: CSRFError):
        app.logger.info("CSRF check failed: %s", error.description)
        return jsonify(AppError(
            ErrorCode.CSRF_INVALID,
            "Invalid CSRF token",
            403,
            errors=[error.description],
        ).to_dict()), 403

    @app.errorhandler(HTTPException)
    def handle_http_exception(error: HTTPException):
        return jsonify({
            "title":   error.name,
            "message": error.description,
            "errors":  [error.description],
            "code":    error.name.upper().replace(" ", "_"),
        }), error.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(error: Exception):
        """
        Catches all unhandled exceptions and returns a generic 500 response.
        The full traceback goes to the application logger only.
        """
        app.logger.error(
            "Unhandled exception: %s\n%s",
            str(error),
            traceback.format_exc(),
        )
        return jsonify({
            "title":   "Server Error",
            "message": "An unexpected error occurred. Please try again later.",
            "errors":  ["An unexpected error occurred. Please try again later."],
            "code":    ErrorCode.INTERNAL_ERROR,
        }), 500


def _register_cors(app: Flask) -> None:
    """
    Adds CORS headers for local development when DEBUG or TESTING is true.

    Credentials are allowed so the session and CSRF cookies travel with
    cross-origin requests from a dev client on another port.
    """

    @app.after_request
    def add_cors_headers(response):
        origin = request.headers.get("Origin")
        allow = bool(app.config.get("DEBUG") or app.config.get("TESTING"))

        if allow and origin:
            response.headers["Access-Control-Allow-Origin"] = origin
            response.headers["Access-Control-Allow-Credentials"] = "true"
            response.headers["Vary"] = "Origin"
            response.headers["Access-Control-Allow-Methods"] = "GET, POST, PUT, DELETE, OPTIONS"
            response.headers["Access-Control-Allow-Headers"] = "Content-Type, X-CSRF-Token"

        return response


def _register_commands(app: Flask) -> None:
    """`flask seed` — create tables if needed and insert the demo data."""
    from backend.app.seeds import seed_command
    app.cli.add_command(seed_command)
