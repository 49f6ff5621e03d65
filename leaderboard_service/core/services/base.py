"""Base service class for business logic."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.exc import SQLAlchemyError

from leaderboard_service.core.exceptions import InternalServerException
from leaderboard_service.infra.logging import get_lazy_logger


class BaseService:
    """Base class for all service classes.

    Provides logging and the store-error boundary for business logic
    services. Client errors (validation, not found) pass through unchanged;
    store failures leave a service only as InternalServerException.

    Loggers:
        - self.logger: Standard logger for INFO/WARNING/ERROR (always evaluated)
        - self._lazy: Lazy logger for DEBUG (zero overhead when DEBUG disabled)

    Example:
        class GameService(BaseService):
            async def get_game(self, hex_id: str) -> GameResponse:
                async with self.store_errors("games.get"):
                    game = await self._repository.get_by_hex_id(self._session, hex_id)
                return GameResponse.model_validate(game)
    """

    def __init__(self) -> None:
        """Initialize base service with loggers."""
        class_name = self.__class__.__name__
        # Standard logger for INFO/WARNING/ERROR
        self.logger = logging.getLogger(class_name)
        # Lazy logger for DEBUG (zero overhead when DEBUG disabled)
        self._lazy = get_lazy_logger(class_name)

    @asynccontextmanager
    async def store_errors(self, operation: str) -> AsyncIterator[None]:
        """Translate SQLAlchemy errors raised inside the block.

        The concrete cause is logged with its traceback and chained as
        ``__cause__``; the raised exception only says "Internal server error".

        Raises:
            InternalServerException: A SQLAlchemyError escaped the block.
        """
        try:
            yield
        except SQLAlchemyError as exc:
            self.logger.exception(
                "Database error",
                extra={"operation": operation, "error_type": type(exc).__name__},
            )
            raise InternalServerException(extra={"operation": operation}) from exc
