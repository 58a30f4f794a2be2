"""
backend/migrations/env.py — Alembic environment.

The database URL comes from the same config class the app would load for
FLASK_ENV (backend/config.py), so migrations and the running API always
target the same database.

    alembic -c backend/alembic.ini upgrade head
    FLASK_ENV=testing alembic -c backend/alembic.ini upgrade head
"""

from __future__ import annotations

import os
from logging.config import fileConfig

from alembic import context
from sqlalchemy import engine_from_config, pool

# alembic.ini prepends the project root to sys.path.
from backend.app.extensions import db
from backend.app.models import cafe, review, user  # noqa: F401
from backend.config import config_by_name

target_metadata = db.metadata

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)


def _database_url() -> str:
    env = os.getenv("FLASK_ENV", "development")
    url = config_by_name.get(env, config_by_name["development"]).SQLALCHEMY_DATABASE_URI
    if not url:
        raise RuntimeError(f"No database URL configured for FLASK_ENV={env!r}.")
    return url


db_url = _database_url()
config.set_main_option("sqlalchemy.url", db_url)

# SQLite cannot ALTER most constraints in place.
_render_as_batch = db_url.startswith("sqlite")


def run_migrations_offline() -> None:
    context.configure(
        url=db_url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        compare_type=True,
        render_as_batch=_render_as_batch,
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    connectable = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            compare_type=True,
            render_as_batch=_render_as_batch,
        )
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
