"""Repository for the scores feature.

Score lists are ordered by one sort column (``score_val``, ``submitted_at``
or ``user_name``) in either direction, with ``id`` ascending as the
tie-break. The cursor carries the last row's sort value and id.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from leaderboard_service.core.database import BaseRepository
from leaderboard_service.core.pagination import (
    CursorCodec,
    KeysetFilter,
    PaginatedResponse,
    PaginationParams,
    ScoreCursor,
    ScoreSortParams,
    SortSpec,
)
from leaderboard_service.core.settings import PaginationSettings, get_pagination_settings
from leaderboard_service.core.validators import validate_hex_id
from leaderboard_service.features.scores.models import Score

if TYPE_CHECKING:
    from collections.abc import Callable

    from sqlalchemy import Select
    from sqlalchemy.ext.asyncio import AsyncSession

    from leaderboard_service.features.scores.schemas import ScoreCreate, ScoreUpdate


class ScoreRepository(BaseRepository[Score]):
    """Repository for Score model.

    Sort parameters and cursors are checked before any statement is
    executed; a bad ``sort_by`` or cursor never reaches the store.
    """

    def __init__(self, settings: PaginationSettings | None = None) -> None:
        super().__init__(Score)
        self.settings = settings or get_pagination_settings()

    async def create(self, session: AsyncSession, payload: ScoreCreate) -> Score:
        """Insert a score. The caller checks that the game is visible.

        Raises:
            InvalidParameterError: Malformed game_hex_id
        """
        validate_hex_id(payload.game_hex_id)
        score = await self.add(
            session,
            Score(
                game_hex_id=payload.game_hex_id,
                score=payload.score,
                score_val=payload.resolved_score_val(),
                user_name=payload.user_name,
                user_id=payload.user_id,
                extra=payload.extra,
            ),
        )

        self._logger.info(
            "Score submitted",
            extra={
                "score_id": score.id,
                "game_hex_id": score.game_hex_id,
                "operation": "db.create_score",
            },
        )
        return score

    async def get_by_id(self, session: AsyncSession, score_id: int) -> Score:
        """Get a visible score.

        Raises:
            NotFoundError: No visible score has this id
        """
        return await self.get_or_raise(session, score_id)

    async def list_by_game(
        self,
        session: AsyncSession,
        game_hex_id: str,
        params: PaginationParams | None = None,
        sort: ScoreSortParams | None = None,
    ) -> PaginatedResponse[Score]:
        """List one game's visible scores.

        An unknown game gives an empty page, not an error.

        Raises:
            InvalidParameterError: Malformed game_hex_id
            InvalidSortFieldError: Unknown sort_by or order
            InvalidCursorError: Malformed cursor, or one that does not fit the sort
        """
        validate_hex_id(game_hex_id)
        statement = self.visible().where(Score.game_hex_id == game_hex_id)
        return await self._paginate(session, statement, params, sort)

    async def list_all(
        self,
        session: AsyncSession,
        params: PaginationParams | None = None,
        sort: ScoreSortParams | None = None,
    ) -> PaginatedResponse[Score]:
        """List visible scores across all games."""
        return await self._paginate(session, self.visible(), params, sort)

    async def update(self, session: AsyncSession, score_id: int, payload: ScoreUpdate) -> Score:
        """Update a visible score; a new ``score`` re-derives ``score_val``.

        Raises:
            NotFoundError: No visible score has this id
        """
        score = await self.get_by_id(session, score_id)
        return await self.apply_changes(
            session,
            score,
            {
                "score": payload.score,
                "score_val": payload.resolved_score_val(),
                "user_name": payload.user_name,
                "user_id": payload.user_id,
                "extra": payload.extra,
            },
        )

    async def soft_delete(self, session: AsyncSession, score_id: int) -> None:
        """Soft-delete a visible score.

        Raises:
            NotFoundError: No visible score has this id (including already deleted)
        """
        await self.soft_delete_where(session, Score.id == score_id, identifier={"id": score_id})

    async def restore(self, session: AsyncSession, score_id: int) -> Score:
        """Restore a soft-deleted score.

        Raises:
            NotFoundError: No soft-deleted score has this id
        """
        await self.restore_where(session, Score.id == score_id, identifier={"id": score_id})
        return await self.get_by_id(session, score_id)

    async def _paginate(
        self,
        session: AsyncSession,
        statement: Select[Any],
        params: PaginationParams | None,
        sort: ScoreSortParams | None,
    ) -> PaginatedResponse[Score]:
        params = params or PaginationParams()
        spec = (sort or ScoreSortParams()).to_sort_spec()
        limit = params.get_limit(self.settings.page_size)

        seek = None
        if params.cursor is not None:
            cursor = CursorCodec.decode(params.cursor, ScoreCursor)
            seek = [spec.parse_cursor_value(cursor.sort_value), cursor.id]

        self._lazy.debug(lambda: f"db.list_scores: order by {spec.order_clause()}, id ASC")

        return await self.paginate_keyset(
            session,
            statement,
            KeysetFilter(spec.keyset_order(Score), seek, limit=limit),
            current_cursor=params.cursor,
            next_cursor_fn=_score_cursor_fn(spec),
        )


def _score_cursor_fn(spec: SortSpec) -> Callable[[Score], str]:
    def next_cursor(score: Score) -> str:
        return CursorCodec.score_cursor(score, spec)

    return next_cursor


# Factory function for dependency injection
_score_repository: ScoreRepository | None = None


def get_score_repository() -> ScoreRepository:
    """Get the process-wide ScoreRepository."""
    global _score_repository
    if _score_repository is None:
        _score_repository = ScoreRepository(get_pagination_settings())
    return _score_repository


__all__ = ["ScoreRepository", "get_score_repository"]
