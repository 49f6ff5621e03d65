"""SQLAlchemy models for the scores feature."""
from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, CheckConstraint, Double, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from leaderboard_service.core.database import (
    Base,
    IntegerPKMixin,
    SoftDeleteMixin,
    UTCDateTime,
    utc_now,
)


class Score(Base, IntegerPKMixin, SoftDeleteMixin):
    """Score submitted by a user for a game.

    ``game_hex_id`` points at a game's public id. There is no foreign key:
    hex ids are unique among visible games only.
    """

    __tablename__ = "score"
    __table_args__ = (
        CheckConstraint(
            "length(user_name) > 0 AND length(user_name) <= 100",
            name="user_name_length",
        ),
        CheckConstraint(
            "length(user_id) > 0 AND length(user_id) <= 255",
            name="user_id_length",
        ),
    )

    game_hex_id: Mapped[str] = mapped_column(String(6), nullable=False, index=True)
    score: Mapped[str] = mapped_column(Text(), nullable=False, comment="Display value")
    score_val: Mapped[float] = mapped_column(
        Double(),
        nullable=False,
        default=0.0,
        comment="Numeric value used for ordering",
    )
    user_name: Mapped[str] = mapped_column(String(100), nullable=False)
    user_id: Mapped[str] = mapped_column(String(255), nullable=False)
    extra: Mapped[dict[str, Any] | None] = mapped_column(JSON(none_as_null=True), nullable=True)
    submitted_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        default=utc_now,
        server_default=func.now(),
        nullable=False,
    )

    def __repr__(self) -> str:
        return (
            f"Score(id={self.id!r}, game_hex_id={self.game_hex_id!r}, "
            f"user_name={self.user_name!r}, score={self.score!r})"
        )


# Keyset indexes; one per sort column, visible rows only
_visible = Score.deleted_at.is_(None)
Index(
    "ix_score_game_score_val",
    Score.game_hex_id,
    Score.score_val.desc(),
    Score.id,
    sqlite_where=_visible,
    postgresql_where=_visible,
)
Index(
    "ix_score_game_submitted_at",
    Score.game_hex_id,
    Score.submitted_at.desc(),
    Score.id,
    sqlite_where=_visible,
    postgresql_where=_visible,
)
Index(
    "ix_score_game_user_name",
    Score.game_hex_id,
    Score.user_name,
    Score.id,
    sqlite_where=_visible,
    postgresql_where=_visible,
)
Index("ix_score_user_id_visible", Score.user_id, sqlite_where=_visible, postgresql_where=_visible)


__all__ = ["Score"]
