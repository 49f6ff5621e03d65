"""Pydantic schemas for the games feature."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from leaderboard_service.core.validators import validate_not_blank, validate_not_blank_optional


class GameBase(BaseModel):
    """Shared attributes for game payloads."""

    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None


class GameCreate(GameBase):
    """Payload used when creating a game. The hex_id is generated."""

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        return validate_not_blank(v)


class GameUpdate(BaseModel):
    """Payload for updating a game; omitted fields keep their value."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str | None) -> str | None:
        return validate_not_blank_optional(v)


class GameResponse(GameBase):
    """Game as returned to callers."""

    id: int
    hex_id: str
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


__all__ = ["GameCreate", "GameResponse", "GameUpdate"]
