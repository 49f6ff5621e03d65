"""Unit tests for score schemas and score_val derivation."""
from __future__ import annotations

from datetime import UTC, datetime
from types import SimpleNamespace

import pytest
from pydantic import ValidationError

from leaderboard_service.features.scores import (
    ScoreCreate,
    ScoreResponse,
    ScoreUpdate,
    derive_score_val,
)

pytestmark = pytest.mark.unit


def _create(**overrides) -> ScoreCreate:
    data = {
        "game_hex_id": "a1b2c3",
        "score": "9500",
        "user_name": "alice",
        "user_id": "u-1",
    }
    data.update(overrides)
    return ScoreCreate(**data)


class TestDeriveScoreVal:
    """Tests for the numeric ordering value of a display score."""

    @pytest.mark.parametrize(
        ("score", "expected"),
        [
            ("9500", 9500.0),
            ("95.5", 95.5),
            (" 12 ", 12.0),
            ("-3", -3.0),
            ("1e3", 1000.0),
            ("1,234", 0.0),
            ("12:34.5", 0.0),
            ("", 0.0),
            ("inf", 0.0),
            ("nan", 0.0),
        ],
    )
    def test_derive(self, score, expected):
        assert derive_score_val(score) == expected


class TestScoreCreate:
    """Tests for submission payloads."""

    def test_score_val_derived_when_omitted(self):
        assert _create(score="95.5").resolved_score_val() == 95.5

    def test_explicit_score_val_wins(self):
        """Formatted scores (times, grouped digits) keep an explicit ordering value."""
        payload = _create(score="1:02.5", score_val=62.5)

        assert payload.resolved_score_val() == 62.5

    def test_unparsable_score_orders_as_zero(self):
        assert _create(score="n/a").resolved_score_val() == 0.0

    @pytest.mark.parametrize("field", ["user_name", "user_id"])
    def test_blank_user_fields_rejected(self, field):
        with pytest.raises(ValidationError):
            _create(**{field: "   "})

    def test_user_name_length(self):
        with pytest.raises(ValidationError):
            _create(user_name="x" * 101)
        assert _create(user_name="x" * 100).user_name == "x" * 100

    def test_non_finite_score_val_rejected(self):
        with pytest.raises(ValidationError):
            _create(score_val=float("inf"))

    def test_extra_metadata(self):
        payload = _create(extra={"level": 3, "device": "ios"})

        assert payload.extra == {"level": 3, "device": "ios"}


class TestScoreUpdate:
    """Tests for partial updates."""

    def test_nothing_to_change(self):
        assert ScoreUpdate().resolved_score_val() is None

    def test_new_score_rederives(self):
        assert ScoreUpdate(score="77").resolved_score_val() == 77.0

    def test_explicit_value_wins(self):
        assert ScoreUpdate(score="77", score_val=1.5).resolved_score_val() == 1.5

    def test_blank_user_name_rejected(self):
        with pytest.raises(ValidationError):
            ScoreUpdate(user_name=" ")


class TestScoreResponse:
    """Tests for mapping rows to responses."""

    def test_from_attributes(self):
        row = SimpleNamespace(
            id=1,
            game_hex_id="a1b2c3",
            score="9500",
            score_val=9500.0,
            user_name="alice",
            user_id="u-1",
            extra=None,
            submitted_at=datetime(2025, 1, 15, 10, 30, tzinfo=UTC),
            deleted_at=None,
        )

        response = ScoreResponse.model_validate(row)

        assert response.id == 1
        assert response.score_val == 9500.0
        assert response.deleted_at is None
