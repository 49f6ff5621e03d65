"""Unit tests for the service layer with mocked repositories."""
from __future__ import annotations

from datetime import UTC, datetime
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from leaderboard_service.core.database import NotFoundError
from leaderboard_service.core.exceptions import (
    InternalServerException,
    InvalidCursorError,
    InvalidParameterError,
)
from leaderboard_service.core.pagination import (
    PaginatedResponse,
    PaginationParams,
    ScoreQueryParams,
    ScoreSortParams,
)
from leaderboard_service.features.games import GameCreate, GameService
from leaderboard_service.features.scores import ScoreCreate, ScoreService

pytestmark = pytest.mark.unit

NOW = datetime(2025, 1, 15, 10, 30, tzinfo=UTC)


def _game_row(**overrides):
    data = {
        "id": 1,
        "hex_id": "a1b2c3",
        "name": "Tetris",
        "description": None,
        "created_at": NOW,
        "updated_at": NOW,
        "deleted_at": None,
    }
    data.update(overrides)
    return SimpleNamespace(**data)


def _score_row(**overrides):
    data = {
        "id": 7,
        "game_hex_id": "a1b2c3",
        "score": "9500",
        "score_val": 9500.0,
        "user_name": "alice",
        "user_id": "u-1",
        "extra": None,
        "submitted_at": NOW,
        "deleted_at": None,
    }
    data.update(overrides)
    return SimpleNamespace(**data)


def _store_error() -> OperationalError:
    return OperationalError("SELECT 1", {}, Exception("connection refused"))


@pytest.fixture
def session():
    return MagicMock(name="AsyncSession")


@pytest.fixture
def game_repo():
    return AsyncMock(name="GameRepository")


@pytest.fixture
def score_repo():
    return AsyncMock(name="ScoreRepository")


class TestGameService:
    """Tests for GameService orchestration."""

    async def test_create_game_maps_to_response(self, session, game_repo):
        game_repo.create.return_value = _game_row()
        service = GameService(session, game_repo)

        response = await service.create_game(GameCreate(name="Tetris"))

        assert response.hex_id == "a1b2c3"
        game_repo.create.assert_awaited_once()

    async def test_list_games_maps_page(self, session, game_repo):
        game_repo.list.return_value = PaginatedResponse(
            data=[_game_row(), _game_row(id=2, hex_id="000002")],
            has_more=True,
            next_cursor="next",
            total_returned=2,
            page_size=2,
        )
        service = GameService(session, game_repo)

        page = await service.list_games(PaginationParams(limit=2))

        assert [game.hex_id for game in page.data] == ["a1b2c3", "000002"]
        assert page.has_more is True
        assert page.next_cursor == "next"

    async def test_store_failure_becomes_internal_error(self, session, game_repo):
        """The concrete cause is chained, never exposed in the detail."""
        cause = _store_error()
        game_repo.list.side_effect = cause
        service = GameService(session, game_repo)

        with pytest.raises(InternalServerException) as exc_info:
            await service.list_games()

        assert exc_info.value.__cause__ is cause
        assert exc_info.value.detail == "Internal server error"
        assert exc_info.value.extra == {"operation": "games.list"}

    async def test_store_failure_is_logged(self, session, game_repo, caplog):
        game_repo.soft_delete.side_effect = _store_error()
        service = GameService(session, game_repo)

        with pytest.raises(InternalServerException):
            await service.delete_game("a1b2c3")

        record = next(r for r in caplog.records if r.getMessage() == "Database error")
        assert record.operation == "games.delete"
        assert record.error_type == "OperationalError"

    async def test_not_found_passes_through(self, session, game_repo):
        game_repo.get_by_hex_id.side_effect = NotFoundError("Game", {"hex_id": "a1b2c3"})
        service = GameService(session, game_repo)

        with pytest.raises(NotFoundError):
            await service.get_game("a1b2c3")

    async def test_cursor_error_passes_through(self, session, game_repo):
        game_repo.list.side_effect = InvalidCursorError()
        service = GameService(session, game_repo)

        with pytest.raises(InvalidCursorError):
            await service.list_games(PaginationParams(cursor="bad"))


class TestScoreService:
    """Tests for ScoreService orchestration."""

    async def test_submit_checks_game_first(self, session, score_repo, game_repo):
        score_repo.create.return_value = _score_row()
        service = ScoreService(session, score_repo, game_repo)
        payload = ScoreCreate(game_hex_id="a1b2c3", score="9500", user_name="alice", user_id="u-1")

        response = await service.submit_score(payload)

        game_repo.get_by_hex_id.assert_awaited_once_with(session, "a1b2c3")
        score_repo.create.assert_awaited_once_with(session, payload)
        assert response.id == 7

    async def test_submit_for_missing_game(self, session, score_repo, game_repo):
        game_repo.get_by_hex_id.side_effect = NotFoundError("Game", {"hex_id": "a1b2c3"})
        service = ScoreService(session, score_repo, game_repo)
        payload = ScoreCreate(game_hex_id="a1b2c3", score="1", user_name="alice", user_id="u-1")

        with pytest.raises(NotFoundError):
            await service.submit_score(payload)

        score_repo.create.assert_not_awaited()

    async def test_submit_with_malformed_hex_id(self, session, score_repo, game_repo):
        game_repo.get_by_hex_id.side_effect = InvalidParameterError("Invalid hex_id")
        service = ScoreService(session, score_repo, game_repo)
        payload = ScoreCreate(game_hex_id="nope", score="1", user_name="alice", user_id="u-1")

        with pytest.raises(InvalidParameterError):
            await service.submit_score(payload)

    async def test_query_scores_splits_parameters(self, session, score_repo, game_repo):
        score_repo.list_by_game.return_value = PaginatedResponse(data=[_score_row()], total_returned=1)
        service = ScoreService(session, score_repo, game_repo)

        page = await service.query_scores(
            ScoreQueryParams(game_hex_id="a1b2c3", limit=5, sort_by="date", order="asc")
        )

        score_repo.list_by_game.assert_awaited_once_with(
            session,
            "a1b2c3",
            PaginationParams(limit=5),
            ScoreSortParams(sort_by="date", order="asc"),
        )
        assert page.data[0].user_name == "alice"

    async def test_list_store_failure(self, session, score_repo, game_repo):
        score_repo.list_by_game.side_effect = _store_error()
        service = ScoreService(session, score_repo, game_repo)

        with pytest.raises(InternalServerException) as exc_info:
            await service.list_game_scores("a1b2c3")

        assert isinstance(exc_info.value.__cause__, OperationalError)
        assert exc_info.value.extra == {"operation": "scores.list_by_game"}

    async def test_restore_not_found(self, session, score_repo, game_repo):
        score_repo.restore.side_effect = NotFoundError("Score", {"id": 3})
        service = ScoreService(session, score_repo, game_repo)

        with pytest.raises(NotFoundError):
            await service.restore_score(3)
