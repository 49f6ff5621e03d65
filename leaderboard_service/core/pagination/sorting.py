"""Sort resolution for keyset pagination.

Score lists can be ordered by three logical keys. Each key maps to exactly
one physical column through a fixed table, so caller input never reaches
SQL as text:

    score      -> score_val     (numeric)
    date       -> submitted_at  (timestamp)
    user_name  -> user_name     (text)

Direction picks the seek operator: ``>`` for ascending, ``<`` for
descending. The ``id`` tie-break is always ascending.

Games have a single fixed ordering, ``created_at DESC, hex_id DESC``.

Unknown sort keys are rejected, unlike unknown limits which clamp. A typo in
``sort_by`` is a request bug; an oversized page is not.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from typing import Any, Literal, TypeVar

from leaderboard_service.core.database.types import as_utc
from leaderboard_service.core.exceptions import InvalidCursorError, InvalidSortFieldError

Direction = Literal["asc", "desc"]

E = TypeVar("E", bound=StrEnum)


class ScoreSortField(StrEnum):
    """Logical sort keys accepted for score lists."""

    SCORE = "score"
    DATE = "date"
    USER_NAME = "user_name"


class SortOrder(StrEnum):
    """Sort direction."""

    ASC = "asc"
    DESC = "desc"


_COLUMN_NAMES: dict[ScoreSortField, str] = {
    ScoreSortField.SCORE: "score_val",
    ScoreSortField.DATE: "submitted_at",
    ScoreSortField.USER_NAME: "user_name",
}

_OPERATORS: dict[SortOrder, str] = {
    SortOrder.ASC: ">",
    SortOrder.DESC: "<",
}

GAME_ORDERING: tuple[tuple[str, Direction], ...] = (
    ("created_at", "desc"),
    ("hex_id", "desc"),
)


# ──────────────────────────────────────────────────────────────
# Text forms of sort values
# ──────────────────────────────────────────────────────────────


def format_float(value: float) -> str:
    """Shortest text for ``value``; integral values drop the fractional part.

    >>> format_float(95.0)
    '95'
    >>> format_float(12.5)
    '12.5'
    """
    if math.isfinite(value) and value.is_integer():
        return str(int(value))
    return repr(value)


def format_timestamp(value: datetime) -> str:
    """RFC 3339 text in UTC (``2025-01-15T10:30:00+00:00``)."""
    return as_utc(value).isoformat()


def parse_timestamp(text: str) -> datetime:
    """Parse RFC 3339 text that carries an explicit offset.

    Raises:
        ValueError: Unparsable text, a timestamp without an offset, or one
            that falls outside the datetime range once shifted to UTC.
    """
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        raise ValueError(f"timestamp has no UTC offset: {text!r}")
    try:
        return as_utc(parsed)
    except OverflowError as exc:
        raise ValueError(f"timestamp out of range in UTC: {text!r}") from exc


# ──────────────────────────────────────────────────────────────
# SortSpec
# ──────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class SortSpec:
    """Resolved sort for score lists.

    Attributes:
        field: Logical sort key.
        order: Direction of the primary key; the id tie-break is always ascending.

    Example:
        spec = SortSpec(ScoreSortField.SCORE, SortOrder.DESC)
        spec.column_name     # "score_val"
        spec.operator        # "<"
        spec.order_clause()  # "score_val DESC"
    """

    field: ScoreSortField = ScoreSortField.SCORE
    order: SortOrder = SortOrder.DESC

    @property
    def column_name(self) -> str:
        return _COLUMN_NAMES[self.field]

    @property
    def operator(self) -> str:
        return _OPERATORS[self.order]

    @property
    def direction(self) -> Direction:
        return "asc" if self.order is SortOrder.ASC else "desc"

    def order_clause(self) -> str:
        """ORDER BY fragment for the primary column, e.g. ``"score_val DESC"``."""
        return f"{self.column_name} {self.order.value.upper()}"

    def column(self, model: type[Any]) -> Any:
        """Mapped attribute on ``model`` for the primary column."""
        return getattr(model, self.column_name)

    def keyset_order(self, model: type[Any]) -> list[tuple[Any, Direction]]:
        """``[(primary column, direction), (id, "asc")]`` for KeysetFilter."""
        return [(self.column(model), self.direction), (model.id, "asc")]

    def cursor_value(self, row: Any) -> str:
        """Text form of ``row``'s primary column, as stored in score cursors."""
        value = getattr(row, self.column_name)
        if self.field is ScoreSortField.SCORE:
            return format_float(float(value))
        if self.field is ScoreSortField.DATE:
            return format_timestamp(value)
        return str(value)

    def parse_cursor_value(self, text: str) -> float | datetime | str:
        """Typed bind value for a cursor's ``sort_value``.

        Raises:
            InvalidCursorError: ``text`` does not parse for the active column.
        """
        try:
            if self.field is ScoreSortField.SCORE:
                number = float(text)
                if not math.isfinite(number):
                    raise ValueError(f"non-finite sort value: {text!r}")
                return number
            if self.field is ScoreSortField.DATE:
                return parse_timestamp(text)
        except ValueError as exc:
            raise InvalidCursorError() from exc
        return text


def resolve_score_sort(
    sort_by: ScoreSortField | str | None = None,
    order: SortOrder | str | None = None,
) -> SortSpec:
    """Resolve caller-supplied sort parameters.

    ``None`` and ``""`` mean "use the default" (score, descending).

    Raises:
        InvalidSortFieldError: Unknown sort key or order.
    """
    return SortSpec(
        field=_coerce(ScoreSortField, "sort_by", sort_by, ScoreSortField.SCORE),
        order=_coerce(SortOrder, "order", order, SortOrder.DESC),
    )


def _coerce(enum_cls: type[E], parameter: str, value: E | str | None, default: E) -> E:
    if value is None or value == "":
        return default
    try:
        return enum_cls(value)
    except ValueError:
        raise InvalidSortFieldError(
            parameter,
            value,
            allowed=[member.value for member in enum_cls],
        ) from None


__all__ = [
    "GAME_ORDERING",
    "Direction",
    "ScoreSortField",
    "SortOrder",
    "SortSpec",
    "format_float",
    "format_timestamp",
    "parse_timestamp",
    "resolve_score_sort",
]
