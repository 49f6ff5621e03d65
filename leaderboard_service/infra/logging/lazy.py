"""Lazy evaluation support for logging.

Repositories log every statement they run at DEBUG. Building those messages
(cursor decoding results, bound values, row counts) should cost nothing when
DEBUG is off, so messages may be passed as zero-argument callables.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any


class LazyString:
    """String whose value is computed only when formatted.

    Example:
        logger.debug("cursor: %s", LazyString(lambda: cursor.model_dump()))
    """

    __slots__ = ("_func",)

    def __init__(self, func: Callable[[], Any]) -> None:
        self._func = func

    def __str__(self) -> str:
        return str(self._func())

    def __repr__(self) -> str:
        return f"LazyString({self._func!r})"


class LazyLoggerAdapter(logging.LoggerAdapter):
    """Logger adapter that evaluates callable messages and args on demand.

    Nothing is evaluated unless the level is enabled. Bound context passed at
    construction is merged into each record's ``extra``.

    Example:
        logger = LazyLoggerAdapter(logging.getLogger(__name__), {})
        logger.debug(lambda: f"db.list: game={hex_id} limit={limit}")
    """

    def process(self, msg: Any, kwargs: Any) -> tuple[Any, Any]:
        """Merge bound context under any per-call ``extra``."""
        if self.extra:
            kwargs["extra"] = {**self.extra, **kwargs.get("extra", {})}
        return msg, kwargs

    def log(self, level: int, msg: Any, *args: Any, **kwargs: Any) -> None:
        """Log ``msg`` at ``level``, calling it (and any callable args) first."""
        if not self.isEnabledFor(level):
            return
        if callable(msg):
            msg = msg()
        if args:
            args = tuple(arg() if callable(arg) else arg for arg in args)
        super().log(level, msg, *args, **kwargs)

    def debug(self, msg: Any, *args: Any, **kwargs: Any) -> None:
        self.log(logging.DEBUG, msg, *args, **kwargs)

    def info(self, msg: Any, *args: Any, **kwargs: Any) -> None:
        self.log(logging.INFO, msg, *args, **kwargs)

    def warning(self, msg: Any, *args: Any, **kwargs: Any) -> None:
        self.log(logging.WARNING, msg, *args, **kwargs)

    def error(self, msg: Any, *args: Any, **kwargs: Any) -> None:
        self.log(logging.ERROR, msg, *args, **kwargs)

    def exception(self, msg: Any, *args: Any, **kwargs: Any) -> None:
        kwargs.setdefault("exc_info", True)
        self.log(logging.ERROR, msg, *args, **kwargs)


def get_lazy_logger(name: str, **context: Any) -> LazyLoggerAdapter:
    """Get a logger with lazy evaluation support.

    Args:
        name: Logger name (usually __name__).
        **context: Fields bound into every record logged through the adapter.

    Returns:
        Logger adapter with lazy evaluation support.

    Example:
        logger = get_lazy_logger(__name__, repository="ScoreRepository")
        logger.debug(lambda: f"db.list_by_game: spec={spec.order_clause()}")
    """
    return LazyLoggerAdapter(logging.getLogger(name), context or {})


__all__ = ["LazyLoggerAdapter", "LazyString", "get_lazy_logger"]
