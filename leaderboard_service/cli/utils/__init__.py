"""CLI utilities for running async operations and formatting output."""

from leaderboard_service.cli.utils.async_runner import coro
from leaderboard_service.cli.utils.formatters import (
    echo_json,
    echo_table,
    error,
    header,
    info,
    page_footer,
    success,
    warning,
)

__all__ = [
    "coro",
    "echo_json",
    "echo_table",
    "error",
    "header",
    "info",
    "page_footer",
    "success",
    "warning",
]
