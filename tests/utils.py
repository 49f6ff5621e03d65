"""Shared helpers for the test suite.

Usage:
    from tests.utils import collect_pages

    rows, pages = await collect_pages(
        lambda cursor: repo.list(session, PaginationParams(cursor=cursor, limit=5))
    )
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from datetime import UTC, datetime
from typing import Any

from leaderboard_service.core.pagination import PaginatedResponse

BASE_TIME = datetime(2025, 1, 15, 10, 30, tzinfo=UTC)


async def collect_pages(
    fetch: Callable[[str | None], Awaitable[PaginatedResponse[Any]]],
    *,
    max_pages: int = 1000,
) -> tuple[list[Any], list[PaginatedResponse[Any]]]:
    """Follow ``next_cursor`` from the first page until ``has_more`` is false.

    Returns:
        All rows in page order and the pages themselves.
    """
    rows: list[Any] = []
    pages: list[PaginatedResponse[Any]] = []
    cursor: str | None = None
    for _ in range(max_pages):
        page = await fetch(cursor)
        pages.append(page)
        rows.extend(page.data)
        if not page.has_more:
            return rows, pages
        assert page.next_cursor is not None
        cursor = page.next_cursor
    raise AssertionError("pagination did not terminate")


def expected_score_order(scores: list[Any], column: str, order: str) -> list[int]:
    """Ids of ``scores`` ordered by ``column`` in ``order`` with ascending id tie-break."""
    by_id = sorted(scores, key=lambda s: s.id)
    ordered = sorted(by_id, key=lambda s: getattr(s, column), reverse=order == "desc")
    return [s.id for s in ordered]


__all__ = ["BASE_TIME", "collect_pages", "expected_score_order"]
