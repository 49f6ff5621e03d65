"""SQLAlchemy models for the games feature.

Soft-deleting a game hides its scores. The store does this, not the
repositories: triggers installed with the schema stamp the game's visible
scores with the game's ``deleted_at``, and clear exactly those stamps when
the game is restored. Scores deleted on their own before the game stay
deleted.
"""
from __future__ import annotations

from sqlalchemy import DDL, CheckConstraint, Index, String, Text, event
from sqlalchemy.orm import Mapped, mapped_column

from leaderboard_service.core.database import (
    Base,
    IntegerPKMixin,
    SoftDeleteMixin,
    TimestampMixin,
)


class Game(Base, IntegerPKMixin, TimestampMixin, SoftDeleteMixin):
    """Game that scores are submitted against.

    ``hex_id`` is the public identifier. It is unique among visible rows
    only, so the id of a soft-deleted game may be handed out again.
    """

    __tablename__ = "game"
    __table_args__ = (
        CheckConstraint("length(name) > 0 AND length(name) <= 255", name="name_length"),
    )

    hex_id: Mapped[str] = mapped_column(
        String(6),
        nullable=False,
        comment="Public 6-character identifier",
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text(), nullable=True)

    def __repr__(self) -> str:
        return f"Game(id={self.id!r}, hex_id={self.hex_id!r}, name={self.name!r})"


# Unique among visible rows only
Index(
    "uq_game_hex_id_visible",
    Game.hex_id,
    unique=True,
    sqlite_where=Game.deleted_at.is_(None),
    postgresql_where=Game.deleted_at.is_(None),
)
# Game list ordering: created_at DESC, hex_id DESC
Index("ix_game_created_at_hex_id", Game.created_at.desc(), Game.hex_id.desc())


# ──────────────────────────────────────────────────────────────
# Soft-delete cascade to scores
# ──────────────────────────────────────────────────────────────

SQLITE_CASCADE_DDL = (
    """
    CREATE TRIGGER IF NOT EXISTS game_soft_delete_scores
    AFTER UPDATE OF deleted_at ON game
    WHEN NEW.deleted_at IS NOT NULL AND OLD.deleted_at IS NULL
    BEGIN
        UPDATE score SET deleted_at = NEW.deleted_at
        WHERE game_hex_id = NEW.hex_id AND deleted_at IS NULL;
    END
    """,
    """
    CREATE TRIGGER IF NOT EXISTS game_restore_scores
    AFTER UPDATE OF deleted_at ON game
    WHEN NEW.deleted_at IS NULL AND OLD.deleted_at IS NOT NULL
    BEGIN
        UPDATE score SET deleted_at = NULL
        WHERE game_hex_id = NEW.hex_id AND deleted_at = OLD.deleted_at;
    END
    """,
)

POSTGRESQL_CASCADE_DDL = (
    """
    CREATE OR REPLACE FUNCTION game_cascade_soft_delete() RETURNS trigger AS $$
    BEGIN
        IF NEW.deleted_at IS NOT NULL AND OLD.deleted_at IS NULL THEN
            UPDATE score SET deleted_at = NEW.deleted_at
            WHERE game_hex_id = NEW.hex_id AND deleted_at IS NULL;
        ELSIF NEW.deleted_at IS NULL AND OLD.deleted_at IS NOT NULL THEN
            UPDATE score SET deleted_at = NULL
            WHERE game_hex_id = NEW.hex_id AND deleted_at = OLD.deleted_at;
        END IF;
        RETURN NEW;
    END;
    $$ LANGUAGE plpgsql
    """,
    """
    CREATE TRIGGER game_soft_delete_cascade
    AFTER UPDATE OF deleted_at ON game
    FOR EACH ROW EXECUTE FUNCTION game_cascade_soft_delete()
    """,
)

# Triggers reference both tables, so they are installed once the whole
# metadata has been created.
for _statement in SQLITE_CASCADE_DDL:
    event.listen(Base.metadata, "after_create", DDL(_statement).execute_if(dialect="sqlite"))
for _statement in POSTGRESQL_CASCADE_DDL:
    event.listen(Base.metadata, "after_create", DDL(_statement).execute_if(dialect="postgresql"))
event.listen(
    Base.metadata,
    "after_drop",
    DDL("DROP FUNCTION IF EXISTS game_cascade_soft_delete()").execute_if(dialect="postgresql"),
)


__all__ = ["POSTGRESQL_CASCADE_DDL", "SQLITE_CASCADE_DDL", "Game"]
