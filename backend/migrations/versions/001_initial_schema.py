"""Initial schema — users, cafes, reviews.

Revision: 001_initial_schema
Created:  2022-04-04

Append-only: never edit this file after it has been applied to a database.
Schema changes go in a NEW migration file.

Creation order follows FK dependencies: users → cafes → reviews.

ON DELETE policies:
  cafes.owner_id    → RESTRICT  (cannot delete a user who owns cafes)
  reviews.cafe_id   → CASCADE   (reviews are owned by their cafe)
  reviews.user_id   → RESTRICT  (cannot delete a user with reviews)
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

# ── Alembic revision identifiers ──────────────────────────────────────────
revision: str = "001_initial_schema"
down_revision: str | None = None      # first migration — no parent
branch_labels: tuple | None = None
depends_on: tuple | None = None


def upgrade() -> None:

    # ── users ──────────────────────────────────────────────────────────────
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("username", sa.String(30), nullable=False),
        sa.Column("email", sa.String(256), nullable=False),
        sa.Column("hashed_password", sa.String(60), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
        sa.PrimaryKeyConstraint("id", name="pk_users"),
        sa.UniqueConstraint("username", name="uq_users_username"),
        sa.UniqueConstraint("email", name="uq_users_email"),
        sa.CheckConstraint(
            "LENGTH(TRIM(username)) >= 3",
            name="ck_users_username_length",
        ),
        sa.CheckConstraint(
            "email LIKE '%@%'",
            name="ck_users_email_format",
        ),
    )

    # ── cafes ──────────────────────────────────────────────────────────────
    op.create_table(
        "cafes",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column(
            "owner_id",
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="RESTRICT", name="fk_cafes_owner"),
            nullable=False,
        ),
        sa.Column("title", sa.String(80), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("img", sa.String(2048), nullable=False),
        sa.Column("address", sa.String(255), nullable=False),
        sa.Column("city", sa.String(255), nullable=False),
        sa.Column("zip_code", sa.String(10), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
        sa.PrimaryKeyConstraint("id", name="pk_cafes"),
        sa.CheckConstraint("LENGTH(TRIM(title)) > 0", name="ck_cafes_title_nonempty"),
        sa.CheckConstraint("LENGTH(TRIM(img)) > 0", name="ck_cafes_img_nonempty"),
        sa.CheckConstraint("LENGTH(TRIM(zip_code)) > 0", name="ck_cafes_zip_nonempty"),
    )
    op.create_index("ix_cafes_owner_id", "cafes", ["owner_id"])
    op.create_index("ix_cafes_created_at", "cafes", ["created_at"])

    # ── reviews ────────────────────────────────────────────────────────────
    op.create_table(
        "reviews",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column(
            "user_id",
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="RESTRICT", name="fk_reviews_user"),
            nullable=False,
        ),
        sa.Column(
            "cafe_id",
            sa.Integer(),
            sa.ForeignKey("cafes.id", ondelete="CASCADE", name="fk_reviews_cafe"),
            nullable=False,
        ),
        sa.Column("answer", sa.Text(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
        sa.PrimaryKeyConstraint("id", name="pk_reviews"),
        sa.CheckConstraint("LENGTH(TRIM(answer)) > 0", name="ck_reviews_answer_nonempty"),
    )
    op.create_index("ix_reviews_user_id", "reviews", ["user_id"])
    op.create_index("ix_reviews_cafe_id", "reviews", ["cafe_id"])


def downgrade() -> None:
    op.drop_table("reviews")
    op.drop_table("cafes")
    op.drop_table("users")
