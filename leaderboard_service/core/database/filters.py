"""Query filtering utilities for SQLAlchemy.

These filters work directly with SQLAlchemy statements without hiding the
query. They're utility helpers, not an abstraction layer.

Usage:
    from sqlalchemy import select
    from leaderboard_service.core.database.filters import SoftDeleteFilter

    stmt = select(Game)
    stmt = SoftDeleteFilter(Game).apply(stmt)

    result = await session.execute(stmt)
    games = result.scalars().all()
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Literal

from sqlalchemy import Select


class StatementFilter(ABC):
    """Base class for statement filters.

    All filters implement `apply()` which modifies a SQLAlchemy statement.
    """

    @abstractmethod
    def apply(self, statement: Select[Any]) -> Select[Any]:
        """Apply filter to statement.

        Args:
            statement: SQLAlchemy select statement

        Returns:
            Modified select statement
        """
        ...


class SoftDeleteFilter(StatementFilter):
    """Restrict a query by soft-delete state.

    ``visible`` (the default) keeps rows with ``deleted_at IS NULL``; this is
    what every normal read uses. ``deleted`` keeps only soft-deleted rows and
    is used by restore operations. ``all`` leaves the statement untouched.

    Example:
            stmt = SoftDeleteFilter(Score).apply(select(Score))
        # WHERE score.deleted_at IS NULL

        stmt = SoftDeleteFilter(Score, state="deleted").apply(select(Score))
        # WHERE score.deleted_at IS NOT NULL
    """

    def __init__(
        self,
        model: type[Any],
        state: Literal["visible", "deleted", "all"] = "visible",
    ):
        """Initialize soft-delete filter.

        Args:
            model: Mapped class carrying a ``deleted_at`` column
            state: Which rows to keep
        """
        self.column = model.deleted_at
        self.state = state

    @property
    def criterion(self) -> Any:
        """WHERE criterion for the configured state (None for ``all``)."""
        if self.state == "visible":
            return self.column.is_(None)
        if self.state == "deleted":
            return self.column.is_not(None)
        return None

    def apply(self, statement: Select[Any]) -> Select[Any]:
        """Apply soft-delete filter to statement."""
        criterion = self.criterion
        if criterion is None:
            return statement
        return statement.where(criterion)


__all__ = [
    "SoftDeleteFilter",
    "StatementFilter",
]
