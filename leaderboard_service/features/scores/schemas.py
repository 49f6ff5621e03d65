"""Pydantic schemas for the scores feature."""

from __future__ import annotations

import math
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from leaderboard_service.core.validators import (
    validate_not_blank,
    validate_not_blank_optional,
)


def derive_score_val(score: str) -> float:
    """Numeric ordering value for a display score.

    Unparsable or non-finite text gives ``0.0``.

    >>> derive_score_val("1,234")
    0.0
    >>> derive_score_val(" 95.5 ")
    95.5
    """
    try:
        value = float(score.strip())
    except ValueError:
        return 0.0
    return value if math.isfinite(value) else 0.0


def _finite(value: float | None) -> float | None:
    if value is not None and not math.isfinite(value):
        msg = "must be a finite number"
        raise ValueError(msg)
    return value


class ScoreCreate(BaseModel):
    """Payload used when submitting a score."""

    game_hex_id: str = Field(..., description="Public id of the game")
    score: str = Field(..., description="Score as displayed")
    score_val: float | None = Field(
        default=None,
        description="Numeric ordering value; derived from score when omitted",
    )
    user_name: str = Field(..., min_length=1, max_length=100)
    user_id: str = Field(..., min_length=1, max_length=255)
    extra: dict[str, Any] | None = None

    @field_validator("user_name", "user_id")
    @classmethod
    def not_blank(cls, v: str) -> str:
        return validate_not_blank(v)

    @field_validator("score_val")
    @classmethod
    def score_val_finite(cls, v: float | None) -> float | None:
        return _finite(v)

    def resolved_score_val(self) -> float:
        """Explicit ``score_val`` if given, else derived from ``score``."""
        if self.score_val is not None:
            return self.score_val
        return derive_score_val(self.score)


class ScoreUpdate(BaseModel):
    """Payload for updating a score; omitted fields keep their value."""

    score: str | None = None
    score_val: float | None = None
    user_name: str | None = Field(default=None, min_length=1, max_length=100)
    user_id: str | None = Field(default=None, min_length=1, max_length=255)
    extra: dict[str, Any] | None = None

    @field_validator("user_name", "user_id")
    @classmethod
    def not_blank(cls, v: str | None) -> str | None:
        return validate_not_blank_optional(v)

    @field_validator("score_val")
    @classmethod
    def score_val_finite(cls, v: float | None) -> float | None:
        return _finite(v)

    def resolved_score_val(self) -> float | None:
        """New ``score_val``: explicit wins, else re-derived from a new ``score``."""
        if self.score_val is not None:
            return self.score_val
        if self.score is not None:
            return derive_score_val(self.score)
        return None


class ScoreResponse(BaseModel):
    """Score as returned to callers."""

    id: int
    game_hex_id: str
    score: str
    score_val: float
    user_name: str
    user_id: str
    extra: dict[str, Any] | None = None
    submitted_at: datetime
    deleted_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


__all__ = ["ScoreCreate", "ScoreResponse", "ScoreUpdate", "derive_score_val"]
