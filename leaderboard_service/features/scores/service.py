"""Service layer for score operations."""
from __future__ import annotations

from typing import TYPE_CHECKING

from leaderboard_service.core.services.base import BaseService
from leaderboard_service.features.games.repository import (
    GameRepository,
    get_game_repository,
)
from leaderboard_service.features.scores.repository import (
    ScoreRepository,
    get_score_repository,
)
from leaderboard_service.features.scores.schemas import ScoreResponse

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from leaderboard_service.core.pagination import (
        PaginatedResponse,
        PaginationParams,
        ScoreQueryParams,
        ScoreSortParams,
    )
    from leaderboard_service.features.scores.schemas import ScoreCreate, ScoreUpdate


class ScoreService(BaseService):
    """Orchestrates score operations and maps rows to ScoreResponse."""

    def __init__(
        self,
        session: AsyncSession,
        repository: ScoreRepository | None = None,
        game_repository: GameRepository | None = None,
    ) -> None:
        super().__init__()
        self._session = session
        self._repository = repository or get_score_repository()
        self._game_repository = game_repository or get_game_repository()

    async def submit_score(self, payload: ScoreCreate) -> ScoreResponse:
        """Create a score for a visible game.

        Raises:
            InvalidParameterError: Malformed game_hex_id
            NotFoundError: The game does not exist or is soft-deleted
            InternalServerException: Store failure
        """
        async with self.store_errors("scores.create"):
            await self._game_repository.get_by_hex_id(self._session, payload.game_hex_id)
            score = await self._repository.create(self._session, payload)

        # INFO level - business event
        self.logger.info(
            "Score submitted",
            extra={
                "score_id": score.id,
                "game_hex_id": score.game_hex_id,
                "user_id": score.user_id,
                "operation": "service.submit_score",
            },
        )
        return ScoreResponse.model_validate(score)

    async def get_score(self, score_id: int) -> ScoreResponse:
        async with self.store_errors("scores.get"):
            score = await self._repository.get_by_id(self._session, score_id)
        return ScoreResponse.model_validate(score)

    async def list_game_scores(
        self,
        game_hex_id: str,
        params: PaginationParams | None = None,
        sort: ScoreSortParams | None = None,
    ) -> PaginatedResponse[ScoreResponse]:
        async with self.store_errors("scores.list_by_game"):
            page = await self._repository.list_by_game(self._session, game_hex_id, params, sort)

        self._lazy.debug(
            lambda: f"service.list_game_scores({game_hex_id}) -> {page.total_returned} items, has_more={page.has_more}"
        )
        return page.map(ScoreResponse.model_validate)

    async def query_scores(self, query: ScoreQueryParams) -> PaginatedResponse[ScoreResponse]:
        """List scores from flat query-string parameters."""
        return await self.list_game_scores(
            query.game_hex_id,
            query.to_pagination_params(),
            query.to_sort_params(),
        )

    async def list_scores(
        self,
        params: PaginationParams | None = None,
        sort: ScoreSortParams | None = None,
    ) -> PaginatedResponse[ScoreResponse]:
        async with self.store_errors("scores.list_all"):
            page = await self._repository.list_all(self._session, params, sort)
        return page.map(ScoreResponse.model_validate)

    async def update_score(self, score_id: int, payload: ScoreUpdate) -> ScoreResponse:
        async with self.store_errors("scores.update"):
            score = await self._repository.update(self._session, score_id, payload)
        return ScoreResponse.model_validate(score)

    async def delete_score(self, score_id: int) -> None:
        async with self.store_errors("scores.delete"):
            await self._repository.soft_delete(self._session, score_id)

        self.logger.info(
            "Score deleted",
            extra={"score_id": score_id, "operation": "service.delete_score"},
        )

    async def restore_score(self, score_id: int) -> ScoreResponse:
        async with self.store_errors("scores.restore"):
            score = await self._repository.restore(self._session, score_id)
        return ScoreResponse.model_validate(score)


__all__ = ["ScoreService"]
