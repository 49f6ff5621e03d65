"""Cursor encoding and decoding for pagination.

Cursors are opaque strings that encode the position in a result set: the
values of the ordering key of the last row a client has seen.

The cursor format is:
1. Compact JSON object, fields in declaration order
2. UTF-8 bytes, URL-safe base64 without ``=`` padding

Game cursor payload:
    {"hex_id":"a1b2c3","created_at":"2025-01-15T10:30:00+00:00"}

Score cursor payload:
    {"id":42,"sort_value":"95"}

Decoding either succeeds completely or raises InvalidCursorError. The error
never says which step failed (alphabet, base64, UTF-8, JSON or shape); the
cause is only logged at DEBUG.
"""

from __future__ import annotations

import base64
import json
import re
from datetime import datetime
from typing import TYPE_CHECKING, Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from leaderboard_service.core.exceptions import InvalidCursorError
from leaderboard_service.core.pagination.sorting import format_timestamp, parse_timestamp
from leaderboard_service.infra.logging.lazy import get_lazy_logger

if TYPE_CHECKING:
    from leaderboard_service.core.pagination.sorting import SortSpec

_lazy = get_lazy_logger(__name__)

_TOKEN_RE = re.compile(r"[A-Za-z0-9_-]*")

C = TypeVar("C", bound=BaseModel)


class GameCursor(BaseModel):
    """Position in the game list (``created_at DESC, hex_id DESC``)."""

    hex_id: str = Field(description="hex_id of the last game on the page")
    created_at: str = Field(description="RFC 3339 created_at of that game")

    model_config = ConfigDict(frozen=True, strict=True, extra="forbid")

    @classmethod
    def from_game(cls, game: Any) -> GameCursor:
        """Build the cursor pointing at ``game``."""
        return cls(hex_id=game.hex_id, created_at=format_timestamp(game.created_at))

    def created_at_datetime(self) -> datetime:
        """Parsed ``created_at``.

        Raises:
            InvalidCursorError: The timestamp is unparsable or has no offset.
        """
        try:
            return parse_timestamp(self.created_at)
        except ValueError as exc:
            _lazy.debug(lambda: f"cursor.game: bad created_at {self.created_at!r}: {exc}")
            raise InvalidCursorError() from exc


class ScoreCursor(BaseModel):
    """Position in a score list under some SortSpec.

    ``sort_value`` is the text form of the active sort column; ``id`` breaks
    ties between rows sharing that value.
    """

    id: int = Field(ge=-(2**63), le=2**63 - 1, description="id of the last score on the page")
    sort_value: str = Field(description="Text form of its sort column")

    model_config = ConfigDict(frozen=True, strict=True, extra="forbid")

    @classmethod
    def from_score(cls, score: Any, spec: SortSpec) -> ScoreCursor:
        """Build the cursor pointing at ``score`` under ``spec``."""
        return cls(id=score.id, sort_value=spec.cursor_value(score))


class CursorCodec:
    """Encode and decode pagination cursors.

    Usage:
        token = CursorCodec.encode(ScoreCursor(id=42, sort_value="95"))
        cursor = CursorCodec.decode(token, ScoreCursor)
        cursor.id  # 42
    """

    @staticmethod
    def encode(cursor: BaseModel) -> str:
        """Encode a cursor model to an opaque, URL-safe token.

        The result is deterministic: equal cursors give equal tokens.
        """
        payload = json.dumps(cursor.model_dump(mode="json"), separators=(",", ":"), ensure_ascii=False)
        return base64.urlsafe_b64encode(payload.encode("utf-8")).decode("ascii").rstrip("=")

    @staticmethod
    def decode(token: str, model: type[C]) -> C:
        """Decode ``token`` into an instance of ``model``.

        Args:
            token: Token produced by :meth:`encode`.
            model: Expected cursor shape (GameCursor or ScoreCursor).

        Returns:
            The decoded cursor.

        Raises:
            InvalidCursorError: For any malformed token.
        """
        try:
            if not _TOKEN_RE.fullmatch(token):
                raise ValueError("characters outside the URL-safe base64 alphabet")
            padded = token + "=" * (-len(token) % 4)
            raw = base64.b64decode(padded, altchars=b"-_", validate=True)
            return model.model_validate_json(raw.decode("utf-8"))
        except (TypeError, ValueError) as exc:
            _lazy.debug(lambda: f"cursor.decode: {model.__name__} rejected: {exc}")
            raise InvalidCursorError() from exc

    @staticmethod
    def game_cursor(game: Any) -> str:
        """Encoded cursor pointing at ``game``."""
        return CursorCodec.encode(GameCursor.from_game(game))

    @staticmethod
    def score_cursor(score: Any, spec: SortSpec) -> str:
        """Encoded cursor pointing at ``score`` under ``spec``."""
        return CursorCodec.encode(ScoreCursor.from_score(score, spec))


__all__ = ["CursorCodec", "GameCursor", "ScoreCursor"]
