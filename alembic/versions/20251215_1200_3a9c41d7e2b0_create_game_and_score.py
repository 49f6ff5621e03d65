"""create_game_and_score

Revision ID: 3a9c41d7e2b0
Revises:
Create Date: 2025-12-15 12:00:00.000000

"""

from __future__ import annotations

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op
from leaderboard_service.features.games.models import (
    POSTGRESQL_CASCADE_DDL,
    SQLITE_CASCADE_DDL,
)

# revision identifiers, used by Alembic.
revision: str = "3a9c41d7e2b0"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

VISIBLE = sa.text("deleted_at IS NULL")


def upgrade() -> None:
    """Create game and score tables, keyset indexes and the soft-delete cascade."""
    op.create_table(
        "game",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("hex_id", sa.String(length=6), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint(
            "length(name) > 0 AND length(name) <= 255",
            name=op.f("ck_game_name_length"),
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_game")),
    )
    op.create_index(
        "uq_game_hex_id_visible",
        "game",
        ["hex_id"],
        unique=True,
        sqlite_where=VISIBLE,
        postgresql_where=VISIBLE,
    )
    op.create_index(
        "ix_game_created_at_hex_id",
        "game",
        [sa.text("created_at DESC"), sa.text("hex_id DESC")],
    )

    op.create_table(
        "score",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("game_hex_id", sa.String(length=6), nullable=False),
        sa.Column("score", sa.Text(), nullable=False),
        sa.Column("score_val", sa.Double(), nullable=False),
        sa.Column("user_name", sa.String(length=100), nullable=False),
        sa.Column("user_id", sa.String(length=255), nullable=False),
        sa.Column("extra", sa.JSON(), nullable=True),
        sa.Column(
            "submitted_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint(
            "length(user_name) > 0 AND length(user_name) <= 100",
            name=op.f("ck_score_user_name_length"),
        ),
        sa.CheckConstraint(
            "length(user_id) > 0 AND length(user_id) <= 255",
            name=op.f("ck_score_user_id_length"),
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_score")),
    )
    op.create_index(op.f("ix_score_game_hex_id"), "score", ["game_hex_id"])
    op.create_index(
        "ix_score_game_score_val",
        "score",
        ["game_hex_id", sa.text("score_val DESC"), "id"],
        sqlite_where=VISIBLE,
        postgresql_where=VISIBLE,
    )
    op.create_index(
        "ix_score_game_submitted_at",
        "score",
        ["game_hex_id", sa.text("submitted_at DESC"), "id"],
        sqlite_where=VISIBLE,
        postgresql_where=VISIBLE,
    )
    op.create_index(
        "ix_score_game_user_name",
        "score",
        ["game_hex_id", "user_name", "id"],
        sqlite_where=VISIBLE,
        postgresql_where=VISIBLE,
    )
    op.create_index(
        "ix_score_user_id_visible",
        "score",
        ["user_id"],
        sqlite_where=VISIBLE,
        postgresql_where=VISIBLE,
    )

    dialect = op.get_bind().dialect.name
    if dialect == "sqlite":
        statements = SQLITE_CASCADE_DDL
    elif dialect == "postgresql":
        statements = POSTGRESQL_CASCADE_DDL
    else:
        statements = ()
    for statement in statements:
        op.execute(statement)


def downgrade() -> None:
    """Drop the cascade, then both tables."""
    dialect = op.get_bind().dialect.name
    if dialect == "sqlite":
        op.execute("DROP TRIGGER IF EXISTS game_restore_scores")
        op.execute("DROP TRIGGER IF EXISTS game_soft_delete_scores")
    elif dialect == "postgresql":
        op.execute("DROP TRIGGER IF EXISTS game_soft_delete_cascade ON game")
        op.execute("DROP FUNCTION IF EXISTS game_cascade_soft_delete()")

    op.drop_index("ix_score_user_id_visible", table_name="score")
    op.drop_index("ix_score_game_user_name", table_name="score")
    op.drop_index("ix_score_game_submitted_at", table_name="score")
    op.drop_index("ix_score_game_score_val", table_name="score")
    op.drop_index(op.f("ix_score_game_hex_id"), table_name="score")
    op.drop_table("score")

    op.drop_index("ix_game_created_at_hex_id", table_name="game")
    op.drop_index("uq_game_hex_id_visible", table_name="game")
    op.drop_table("game")
