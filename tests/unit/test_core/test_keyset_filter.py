"""Unit tests for KeysetFilter SQL generation."""
from __future__ import annotations

import re

import pytest
from sqlalchemy import select
from sqlalchemy.dialects import sqlite

from leaderboard_service.core.database.filters import SoftDeleteFilter
from leaderboard_service.core.pagination.filters import KeysetFilter
from leaderboard_service.features.games.models import Game
from leaderboard_service.features.scores.models import Score

pytestmark = pytest.mark.unit


def _sql(statement, *, literal: bool = True) -> str:
    compiled = statement.compile(
        dialect=sqlite.dialect(),
        compile_kwargs={"literal_binds": literal},
    )
    return re.sub(r"\s+", " ", str(compiled))


class TestKeysetFilter:
    """Tests for ordering, seek predicate and probe limit."""

    def test_first_page_orders_and_overfetches(self):
        """Without seek values only ORDER BY and LIMIT n+1 are added."""
        keyset = KeysetFilter([(Score.score_val, "desc"), (Score.id, "asc")], limit=25)

        sql = _sql(keyset.apply(select(Score)))

        assert "ORDER BY score.score_val DESC, score.id ASC" in sql
        assert "LIMIT 26" in sql
        assert "WHERE" not in sql
        assert keyset.seek_condition() is None

    def test_descending_seek(self):
        """DESC primary column seeks with <, the id tie-break with >."""
        keyset = KeysetFilter(
            [(Score.score_val, "desc"), (Score.id, "asc")],
            [95.0, 42],
            limit=10,
        )

        sql = _sql(keyset.apply(select(Score)))

        assert "score.score_val < 95.0 OR score.score_val = 95.0 AND score.id > 42" in sql
        assert "LIMIT 11" in sql

    def test_ascending_seek(self):
        keyset = KeysetFilter(
            [(Score.user_name, "asc"), (Score.id, "asc")],
            ["bob", 7],
            limit=5,
        )

        sql = _sql(keyset.apply(select(Score)))

        assert "score.user_name > 'bob' OR score.user_name = 'bob' AND score.id > 7" in sql
        assert "ORDER BY score.user_name ASC, score.id ASC" in sql

    def test_game_ordering_seeks_below_both_columns(self):
        """created_at DESC, hex_id DESC is the row comparison (created_at, hex_id) < (t, h)."""
        keyset = KeysetFilter(
            [(Game.created_at, "desc"), (Game.hex_id, "desc")],
            ["2025-01-15T10:30:00+00:00", "a1b2c3"],
            limit=25,
        )

        sql = _sql(keyset.apply(select(Game)), literal=False)

        assert "game.created_at < ? OR game.created_at = ? AND game.hex_id < ?" in sql
        assert "ORDER BY game.created_at DESC, game.hex_id DESC" in sql

    def test_composes_with_soft_delete_filter(self):
        statement = SoftDeleteFilter(Score).apply(select(Score).where(Score.game_hex_id == "a1b2c3"))
        keyset = KeysetFilter([(Score.id, "asc")], [3], limit=2)

        sql = _sql(keyset.apply(statement))

        assert "score.deleted_at IS NULL" in sql
        assert "score.id > 3" in sql
        assert "LIMIT 3" in sql

    def test_seek_values_are_bound_parameters(self):
        """Seek values never appear in the SQL text."""
        keyset = KeysetFilter(
            [(Score.user_name, "asc"), (Score.id, "asc")],
            ["x' OR 1=1 --", 1],
            limit=5,
        )

        sql = _sql(keyset.apply(select(Score)), literal=False)

        assert "OR 1=1" not in sql

    def test_seek_length_must_match(self):
        with pytest.raises(ValueError, match="seek has 1 values for 2 order_by columns"):
            KeysetFilter([(Score.score_val, "desc"), (Score.id, "asc")], [95.0], limit=5)

    @pytest.mark.parametrize("limit", [0, -1])
    def test_limit_must_be_positive(self, limit):
        with pytest.raises(ValueError, match="limit must be positive"):
            KeysetFilter([(Score.id, "asc")], limit=limit)
