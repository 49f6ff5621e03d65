"""Keyset filter for SQLAlchemy queries.

The KeysetFilter implements the seek method of pagination:
- Instead of OFFSET, WHERE conditions seek directly past the last-seen row
- Results stay stable when rows are inserted or deleted between pages
- One extra row is fetched so the caller can tell whether more pages exist

How it works:
    For ORDER BY score_val DESC, id ASC with cursor at (v1, id1):
    WHERE (score_val < v1) OR (score_val = v1 AND id > id1)

    For ORDER BY created_at DESC, hex_id DESC with cursor at (t1, h1):
    WHERE (created_at < t1) OR (created_at = t1 AND hex_id < h1)
    which is the row comparison (created_at, hex_id) < (t1, h1).

Cursor decoding happens before the filter is built; the filter only sees
typed seek values, which are always bound as parameters.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, Literal

from sqlalchemy import Select, and_, or_

from leaderboard_service.core.database.filters import StatementFilter

if TYPE_CHECKING:
    from sqlalchemy.orm import InstrumentedAttribute


class KeysetFilter(StatementFilter):
    """Apply keyset pagination to a SQLAlchemy query.

    The filter adds:
    1. ORDER BY for every column of ``order_by``, in order
    2. the seek condition, when ``seek`` values are given
    3. LIMIT ``limit + 1`` (over-fetch probe)

    Example:
        stmt = SoftDeleteFilter(Score).apply(select(Score))
        stmt = KeysetFilter(
            order_by=[(Score.score_val, "desc"), (Score.id, "asc")],
            seek=[95.0, 42],
            limit=25,
        ).apply(stmt)

    Attributes:
        order_by: List of (column, direction) tuples; the last column must be unique
        seek: Values of the order_by columns for the last-seen row (None for first page)
        limit: Page size
    """

    def __init__(
        self,
        order_by: Sequence[tuple[InstrumentedAttribute[Any], Literal["asc", "desc"]]],
        seek: Sequence[Any] | None = None,
        *,
        limit: int,
    ) -> None:
        """Initialize keyset filter.

        Args:
            order_by: (column, direction) pairs defining a total order
            seek: One value per order_by column, or None for the first page
            limit: Maximum items to return (page size)

        Raises:
            ValueError: ``seek`` does not match ``order_by`` or ``limit`` < 1.
        """
        if seek is not None and len(seek) != len(order_by):
            raise ValueError(
                f"seek has {len(seek)} values for {len(order_by)} order_by columns"
            )
        if limit < 1:
            raise ValueError(f"limit must be positive, got {limit}")
        self.order_by = list(order_by)
        self.seek = list(seek) if seek is not None else None
        self.limit = limit

    def apply(self, statement: Select[Any]) -> Select[Any]:
        """Apply ordering, seek condition and probe limit to ``statement``."""
        statement = self._apply_ordering(statement)
        criterion = self.seek_condition()
        if criterion is not None:
            statement = statement.where(criterion)
        return statement.limit(self.limit + 1)

    def _apply_ordering(self, statement: Select[Any]) -> Select[Any]:
        for column, direction in self.order_by:
            statement = statement.order_by(column.desc() if direction == "desc" else column.asc())
        return statement

    def seek_condition(self) -> Any:
        """Compound OR condition selecting rows strictly after ``seek``.

        For columns (a, b, c) with seek values (v1, v2, v3):
            (a op v1) OR
            (a = v1 AND b op v2) OR
            (a = v1 AND b = v2 AND c op v3)

        ``op`` is ``<`` for descending columns and ``>`` for ascending ones.
        Returns None when there is nothing to seek past.
        """
        if self.seek is None:
            return None

        or_conditions = []
        for i, ((column, direction), value) in enumerate(zip(self.order_by, self.seek, strict=True)):
            compare_cond = column < value if direction == "desc" else column > value
            eq_conditions = [
                prev_column == prev_value
                for (prev_column, _), prev_value in zip(self.order_by[:i], self.seek[:i], strict=True)
            ]
            if eq_conditions:
                or_conditions.append(and_(*eq_conditions, compare_cond))
            else:
                or_conditions.append(compare_cond)
        return or_(*or_conditions)


__all__ = ["KeysetFilter"]
