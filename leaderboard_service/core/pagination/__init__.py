"""Keyset (cursor-based) pagination.

This package provides pagination that is:
- Stable: pages don't shift when rows are inserted or deleted between requests
- Performant: indexed seeks instead of OFFSET scans
- Stateless: the cursor is the whole resume position; nothing is kept server-side

Building blocks, leaf first:
    sorting   - SortSpec / resolve_score_sort: logical sort key -> column + operator
    cursor    - CursorCodec, GameCursor, ScoreCursor: opaque position tokens
    filters   - KeysetFilter: ORDER BY + seek predicate + LIMIT n+1
    schemas   - PaginationParams, ScoreSortParams, PaginatedResponse

Usage:
    spec = sort_params.to_sort_spec()
    limit = params.get_limit(settings.page_size)
    seek = None
    if params.cursor:
        cursor = CursorCodec.decode(params.cursor, ScoreCursor)
        seek = [spec.parse_cursor_value(cursor.sort_value), cursor.id]

    stmt = SoftDeleteFilter(Score).apply(select(Score))
    stmt = KeysetFilter(spec.keyset_order(Score), seek, limit=limit).apply(stmt)
    rows = (await session.execute(stmt)).scalars().all()

    page = PaginatedResponse.from_query_results(
        rows, limit, params.cursor, lambda row: CursorCodec.score_cursor(row, spec)
    )
"""

from leaderboard_service.core.pagination.cursor import CursorCodec, GameCursor, ScoreCursor
from leaderboard_service.core.pagination.filters import KeysetFilter
from leaderboard_service.core.pagination.schemas import (
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    PaginatedResponse,
    PaginationInfo,
    PaginationParams,
    ScoreQueryParams,
    ScoreSortParams,
)
from leaderboard_service.core.pagination.sorting import (
    GAME_ORDERING,
    ScoreSortField,
    SortOrder,
    SortSpec,
    resolve_score_sort,
)

__all__ = [
    "DEFAULT_PAGE_SIZE",
    "GAME_ORDERING",
    "MAX_PAGE_SIZE",
    # Cursor utilities
    "CursorCodec",
    "GameCursor",
    # Filter
    "KeysetFilter",
    # Schemas
    "PaginatedResponse",
    "PaginationInfo",
    "PaginationParams",
    "ScoreCursor",
    "ScoreQueryParams",
    # Sorting
    "ScoreSortField",
    "ScoreSortParams",
    "SortOrder",
    "SortSpec",
    "resolve_score_sort",
]
