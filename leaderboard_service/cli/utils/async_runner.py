"""Utilities for running async operations in CLI commands."""

import asyncio
from collections.abc import Awaitable, Callable
from functools import wraps
from typing import TypeVar

T = TypeVar("T")


def coro(f: Callable[..., Awaitable[T]]) -> Callable[..., T]:
    """
    Decorator that makes an async function synchronous for Click.

    The process-wide engine is disposed before the event loop closes.

    Usage:
        @cli.command()
        @coro
        async def my_command():
            async with get_async_session() as session:
                ...
    """

    @wraps(f)
    def wrapper(*args, **kwargs) -> T:
        async def _run() -> T:
            from leaderboard_service.infra.database import close_database

            try:
                return await f(*args, **kwargs)
            finally:
                await close_database()

        return asyncio.run(_run())

    return wrapper
