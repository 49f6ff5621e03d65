"""Reusable validators for schemas and repositories.

Usage with Pydantic v2:
    from leaderboard_service.core.validators import validate_not_blank

    class GameCreate(BaseModel):
        name: str = Field(..., min_length=1, max_length=255)

        @field_validator("name")
        @classmethod
        def name_not_blank(cls, v: str) -> str:
            return validate_not_blank(v)

Identifier checks raise client errors directly:
    from leaderboard_service.core.validators import validate_hex_id

    validate_hex_id(hex_id)  # InvalidParameterError (400) when malformed
"""

from __future__ import annotations

from leaderboard_service.core.validators.common import (
    optional_validator,
    validate_not_blank,
    validate_not_blank_optional,
)
from leaderboard_service.core.validators.identifiers import (
    HEX_ID_LENGTH,
    is_valid_hex_id,
    validate_hex_id,
)

__all__ = [
    "HEX_ID_LENGTH",
    "is_valid_hex_id",
    "optional_validator",
    "validate_hex_id",
    "validate_not_blank",
    "validate_not_blank_optional",
]
