"""Service layer for game operations."""
from __future__ import annotations

from typing import TYPE_CHECKING

from leaderboard_service.core.services.base import BaseService
from leaderboard_service.features.games.repository import (
    GameRepository,
    get_game_repository,
)
from leaderboard_service.features.games.schemas import GameResponse

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from leaderboard_service.core.pagination import PaginatedResponse, PaginationParams
    from leaderboard_service.features.games.schemas import GameCreate, GameUpdate


class GameService(BaseService):
    """Orchestrates game operations and maps rows to GameResponse."""

    def __init__(
        self,
        session: AsyncSession,
        repository: GameRepository | None = None,
    ) -> None:
        super().__init__()
        self._session = session
        self._repository = repository or get_game_repository()

    async def create_game(self, payload: GameCreate) -> GameResponse:
        async with self.store_errors("games.create"):
            game = await self._repository.create(self._session, payload)
        return GameResponse.model_validate(game)

    async def get_game(self, hex_id: str) -> GameResponse:
        async with self.store_errors("games.get"):
            game = await self._repository.get_by_hex_id(self._session, hex_id)
        return GameResponse.model_validate(game)

    async def list_games(self, params: PaginationParams | None = None) -> PaginatedResponse[GameResponse]:
        """One page of visible games, newest first."""
        async with self.store_errors("games.list"):
            page = await self._repository.list(self._session, params)

        self._lazy.debug(
            lambda: f"service.list_games -> {page.total_returned} items, has_more={page.has_more}"
        )
        return page.map(GameResponse.model_validate)

    async def update_game(self, hex_id: str, payload: GameUpdate) -> GameResponse:
        async with self.store_errors("games.update"):
            game = await self._repository.update(self._session, hex_id, payload)
        return GameResponse.model_validate(game)

    async def delete_game(self, hex_id: str) -> None:
        """Soft-delete a game (its scores disappear from listings too)."""
        async with self.store_errors("games.delete"):
            await self._repository.soft_delete(self._session, hex_id)

        # INFO level - lifecycle event
        self.logger.info(
            "Game deleted",
            extra={"game_hex_id": hex_id, "operation": "service.delete_game"},
        )

    async def restore_game(self, hex_id: str) -> GameResponse:
        async with self.store_errors("games.restore"):
            game = await self._repository.restore(self._session, hex_id)

        self.logger.info(
            "Game restored",
            extra={"game_hex_id": hex_id, "operation": "service.restore_game"},
        )
        return GameResponse.model_validate(game)


__all__ = ["GameService"]
