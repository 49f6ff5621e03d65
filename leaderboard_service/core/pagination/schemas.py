"""Pagination request and response schemas.

Request side:
    PaginationParams  - cursor + limit for any list operation
    ScoreSortParams   - sort_by + order for score lists
    ScoreQueryParams  - flat query-string shape combining both for one game

Response side:
    PaginatedResponse[T] - one page of rows plus cursor metadata

Absent and empty values always mean "use the default"; they are never
errors. Limits outside ``[1, MAX_PAGE_SIZE]`` clamp to ``MAX_PAGE_SIZE``
instead of failing. Sort keys are different: unknown values are rejected
when resolved (see ``resolve_score_sort``).
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

from leaderboard_service.core.pagination.sorting import (
    ScoreSortField,
    SortOrder,
    SortSpec,
    resolve_score_sort,
)
from leaderboard_service.core.settings.pagination import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE

T = TypeVar("T")
U = TypeVar("U")


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and value == "":
        return None
    return value


# ──────────────────────────────────────────────────────────────
# Request parameters
# ──────────────────────────────────────────────────────────────


class PaginationParams(BaseModel):
    """Cursor and page size for a list request.

    Attributes:
        cursor: Opaque token from a previous page's ``next_cursor``
        limit: Requested page size; clamped by :meth:`get_limit`
    """

    cursor: str | None = Field(default=None, description="Cursor from a previous page")
    limit: int | None = Field(default=None, description="Requested page size")

    model_config = ConfigDict(frozen=True)

    @field_validator("cursor", mode="before")
    @classmethod
    def blank_cursor_to_none(cls, v: Any) -> Any:
        return _blank_to_none(v)

    def get_limit(self, default_page_size: int = DEFAULT_PAGE_SIZE) -> int:
        """Effective page size.

        - absent: ``default_page_size`` clamped to ``[1, MAX_PAGE_SIZE]``
        - ``1..MAX_PAGE_SIZE``: as requested
        - anything else (0, negative, oversized): ``MAX_PAGE_SIZE``

        Example:
            PaginationParams(limit=0).get_limit()     # 100
            PaginationParams(limit=1000).get_limit()  # 100
            PaginationParams().get_limit()            # 25
        """
        if self.limit is None:
            return max(1, min(default_page_size, MAX_PAGE_SIZE))
        if 1 <= self.limit <= MAX_PAGE_SIZE:
            return self.limit
        return MAX_PAGE_SIZE


class ScoreSortParams(BaseModel):
    """Sort parameters for score lists.

    Values are kept as given and resolved by :meth:`to_sort_spec`, which
    raises ``InvalidSortFieldError`` for unknown keys.
    """

    sort_by: ScoreSortField | str | None = Field(
        default=None,
        description="score | date | user_name (default score)",
    )
    order: SortOrder | str | None = Field(
        default=None,
        description="asc | desc (default desc)",
    )

    model_config = ConfigDict(frozen=True)

    @field_validator("sort_by", "order", mode="before")
    @classmethod
    def blank_sort_to_none(cls, v: Any) -> Any:
        return _blank_to_none(v)

    def to_sort_spec(self) -> SortSpec:
        return resolve_score_sort(self.sort_by, self.order)


class ScoreQueryParams(BaseModel):
    """Flat query-string parameters for listing one game's scores.

    Example:
        params = ScoreQueryParams(game_hex_id="a1b2c3", limit=10, sort_by="date")
        page = await repo.list_by_game(
            session,
            params.game_hex_id,
            params.to_pagination_params(),
            params.to_sort_params(),
        )
    """

    game_hex_id: str = Field(description="Game whose scores are listed")
    cursor: str | None = None
    limit: int | None = None
    sort_by: ScoreSortField | str | None = None
    order: SortOrder | str | None = None

    model_config = ConfigDict(frozen=True)

    @field_validator("cursor", "sort_by", "order", mode="before")
    @classmethod
    def blank_to_none(cls, v: Any) -> Any:
        return _blank_to_none(v)

    def to_pagination_params(self) -> PaginationParams:
        return PaginationParams(cursor=self.cursor, limit=self.limit)

    def to_sort_params(self) -> ScoreSortParams:
        return ScoreSortParams(sort_by=self.sort_by, order=self.order)


# ──────────────────────────────────────────────────────────────
# Response
# ──────────────────────────────────────────────────────────────


class PaginationInfo(BaseModel):
    """Page metadata without the rows."""

    has_more: bool = Field(description="Whether more items exist after this page")
    next_cursor: str | None = Field(default=None, description="Cursor to fetch next page")
    current_cursor: str | None = Field(
        default=None,
        description="Cursor this page was requested with, echoed verbatim",
    )
    total_returned: int = Field(description="Number of items in this page")
    page_size: int = Field(description="Effective page size of the request")


class PaginatedResponse(BaseModel, Generic[T]):
    """One page of a keyset-paginated list.

    Usage:
        rows = (await session.execute(stmt)).scalars().all()  # limit + 1 rows
        page = PaginatedResponse.from_query_results(
            rows,
            requested_limit=limit,
            current_cursor=params.cursor,
            next_cursor_fn=CursorCodec.game_cursor,
        )

    Attributes:
        data: Items of this page, in list order
        has_more: Whether more items exist after this page
        next_cursor: Cursor for the next page (None if no more)
        current_cursor: Cursor the page was requested with
        total_returned: ``len(data)``
        page_size: Effective page size of the request
    """

    data: list[T] = Field(default_factory=list, description="Items of this page")
    has_more: bool = Field(default=False, description="Whether more items exist")
    next_cursor: str | None = Field(default=None, description="Cursor to fetch next page")
    current_cursor: str | None = Field(
        default=None,
        description="Cursor this page was requested with",
    )
    total_returned: int = Field(default=0, description="Number of items in this page")
    page_size: int = Field(default=DEFAULT_PAGE_SIZE, description="Effective page size")

    model_config = ConfigDict(arbitrary_types_allowed=True)

    @classmethod
    def from_query_results(
        cls,
        rows: Sequence[T],
        requested_limit: int,
        current_cursor: str | None,
        next_cursor_fn: Callable[[T], str],
    ) -> PaginatedResponse[T]:
        """Assemble a page from an over-fetched result.

        ``rows`` is what a ``LIMIT requested_limit + 1`` query returned. When
        it holds more than ``requested_limit`` rows the extra probe row is
        dropped and ``next_cursor`` is built from the last retained row.

        Args:
            rows: Query result, at most ``requested_limit + 1`` rows
            requested_limit: Effective page size
            current_cursor: Cursor of the request, echoed back unchanged
            next_cursor_fn: Builds a cursor from a row

        Returns:
            The assembled page
        """
        data = list(rows)
        has_more = len(data) > requested_limit
        next_cursor = None
        if has_more:
            del data[requested_limit:]
            if data:
                next_cursor = next_cursor_fn(data[-1])

        return cls(
            data=data,
            has_more=has_more,
            next_cursor=next_cursor,
            current_cursor=current_cursor,
            total_returned=len(data),
            page_size=requested_limit,
        )

    def map(self, fn: Callable[[T], U]) -> PaginatedResponse[U]:
        """Same page with every item transformed by ``fn``.

        Example:
            page.map(GameResponse.model_validate)
        """
        return PaginatedResponse(
            data=[fn(item) for item in self.data],
            has_more=self.has_more,
            next_cursor=self.next_cursor,
            current_cursor=self.current_cursor,
            total_returned=self.total_returned,
            page_size=self.page_size,
        )

    def pagination_info(self) -> PaginationInfo:
        return PaginationInfo(
            has_more=self.has_more,
            next_cursor=self.next_cursor,
            current_cursor=self.current_cursor,
            total_returned=self.total_returned,
            page_size=self.page_size,
        )


__all__ = [
    "DEFAULT_PAGE_SIZE",
    "MAX_PAGE_SIZE",
    "PaginatedResponse",
    "PaginationInfo",
    "PaginationParams",
    "ScoreQueryParams",
    "ScoreSortParams",
]
