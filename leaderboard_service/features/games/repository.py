"""Repository for the games feature.

Games are listed newest first (``created_at DESC, hex_id DESC``) with
keyset pagination. All reads skip soft-deleted games; ``restore`` is the
only operation that targets them.
"""

from __future__ import annotations

import secrets
from typing import TYPE_CHECKING

from leaderboard_service.core.database import BaseRepository, HexIdExhaustedError, utc_now
from leaderboard_service.core.pagination import (
    GAME_ORDERING,
    CursorCodec,
    GameCursor,
    KeysetFilter,
    PaginatedResponse,
    PaginationParams,
)
from leaderboard_service.core.settings import PaginationSettings, get_pagination_settings
from leaderboard_service.core.validators import validate_hex_id
from leaderboard_service.features.games.models import Game

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from leaderboard_service.features.games.schemas import GameCreate, GameUpdate

HEX_ID_ATTEMPTS = 10


def generate_hex_id() -> str:
    """Six random lowercase hex digits."""
    return secrets.token_hex(3)


class GameRepository(BaseRepository[Game]):
    """Repository for Game model.

    Inherits from BaseRepository:
        - get / get_or_raise / get_by / get_by_or_raise (visible rows)
        - add, apply_changes, soft_delete_where, restore_where, paginate_keyset

    Feature-specific methods below. Every method taking a ``hex_id``
    validates it first and raises InvalidParameterError before any query.
    """

    def __init__(
        self,
        settings: PaginationSettings | None = None,
        *,
        hex_id_attempts: int = HEX_ID_ATTEMPTS,
    ) -> None:
        """Initialize with Game model.

        Args:
            settings: Pagination settings; the default page size comes from here
            hex_id_attempts: How many generated hex ids to try before giving up
        """
        super().__init__(Game)
        self.settings = settings or get_pagination_settings()
        self.hex_id_attempts = hex_id_attempts

    async def create(self, session: AsyncSession, payload: GameCreate) -> Game:
        """Create a game with a freshly generated hex_id.

        Raises:
            HexIdExhaustedError: Every candidate id was taken by a visible game
        """
        hex_id = await self._allocate_hex_id(session)
        game = await self.add(
            session,
            Game(hex_id=hex_id, name=payload.name, description=payload.description),
        )

        self._logger.info(
            "Game created",
            extra={"game_hex_id": game.hex_id, "game_id": game.id, "operation": "db.create_game"},
        )
        return game

    async def get_by_hex_id(self, session: AsyncSession, hex_id: str) -> Game:
        """Get a visible game by hex_id.

        Raises:
            InvalidParameterError: Malformed hex_id
            NotFoundError: No visible game has this hex_id
        """
        validate_hex_id(hex_id)
        return await self.get_by_or_raise(session, Game.hex_id, hex_id)

    async def get_by_id(self, session: AsyncSession, game_id: int) -> Game:
        """Get a visible game by surrogate id.

        Raises:
            NotFoundError: No visible game has this id
        """
        return await self.get_or_raise(session, game_id)

    async def list(
        self,
        session: AsyncSession,
        params: PaginationParams | None = None,
    ) -> PaginatedResponse[Game]:
        """List visible games, newest first.

        Raises:
            InvalidCursorError: Malformed cursor (before any query runs)
        """
        params = params or PaginationParams()
        limit = params.get_limit(self.settings.page_size)

        seek = None
        if params.cursor is not None:
            cursor = CursorCodec.decode(params.cursor, GameCursor)
            seek = [cursor.created_at_datetime(), cursor.hex_id]

        keyset = KeysetFilter(
            [(getattr(Game, column), direction) for column, direction in GAME_ORDERING],
            seek,
            limit=limit,
        )
        return await self.paginate_keyset(
            session,
            self.visible(),
            keyset,
            current_cursor=params.cursor,
            next_cursor_fn=CursorCodec.game_cursor,
        )

    async def update(self, session: AsyncSession, hex_id: str, payload: GameUpdate) -> Game:
        """Update name and/or description; ``updated_at`` always moves.

        Raises:
            InvalidParameterError: Malformed hex_id
            NotFoundError: No visible game has this hex_id
        """
        game = await self.get_by_hex_id(session, hex_id)
        return await self.apply_changes(
            session,
            game,
            {"name": payload.name, "description": payload.description, "updated_at": utc_now()},
        )

    async def soft_delete(self, session: AsyncSession, hex_id: str) -> None:
        """Soft-delete a visible game; the store hides its scores too.

        Raises:
            InvalidParameterError: Malformed hex_id
            NotFoundError: No visible game has this hex_id (including already deleted)
        """
        validate_hex_id(hex_id)
        await self.soft_delete_where(
            session,
            Game.hex_id == hex_id,
            identifier={"hex_id": hex_id},
            extra_values={"updated_at": utc_now()},
        )

    async def restore(self, session: AsyncSession, hex_id: str) -> Game:
        """Restore a soft-deleted game and the scores its deletion hid.

        Raises:
            InvalidParameterError: Malformed hex_id
            NotFoundError: No soft-deleted game has this hex_id
        """
        validate_hex_id(hex_id)
        await self.restore_where(
            session,
            Game.hex_id == hex_id,
            identifier={"hex_id": hex_id},
            extra_values={"updated_at": utc_now()},
        )
        return await self.get_by_or_raise(session, Game.hex_id, hex_id)

    async def _allocate_hex_id(self, session: AsyncSession) -> str:
        for attempt in range(1, self.hex_id_attempts + 1):
            candidate = generate_hex_id()
            if await self.get_by(session, Game.hex_id, candidate) is None:
                return candidate
            self._lazy.debug(lambda: f"db.allocate_hex_id: {candidate} taken (attempt {attempt})")
        raise HexIdExhaustedError(self.hex_id_attempts)


# Factory function for dependency injection
_game_repository: GameRepository | None = None


def get_game_repository() -> GameRepository:
    """Get the process-wide GameRepository (settings from the cached loader)."""
    global _game_repository
    if _game_repository is None:
        _game_repository = GameRepository(get_pagination_settings())
    return _game_repository


__all__ = ["GameRepository", "generate_hex_id", "get_game_repository"]
