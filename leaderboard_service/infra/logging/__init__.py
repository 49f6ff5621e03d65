"""Logging infrastructure.

Provides structured logging with:
- JSONL format for log aggregation (Loki/Elasticsearch)
- OpenTelemetry trace correlation
- Lazy evaluation for expensive debug messages

Basic usage:
    from leaderboard_service.infra.logging import get_lazy_logger, setup_logging

    setup_logging()  # once per process, from LoggingSettings

    lazy_logger = get_lazy_logger(__name__)
    lazy_logger.debug(lambda: f"db.list: {expensive_dump()}")  # Only runs if DEBUG enabled
"""

from leaderboard_service.infra.logging.config import (
    configure_logging,
    reset_logging_state,
    setup_logging,
)
from leaderboard_service.infra.logging.formatters import JSONFormatter
from leaderboard_service.infra.logging.lazy import (
    LazyLoggerAdapter,
    LazyString,
    get_lazy_logger,
)

__all__ = [
    "JSONFormatter",
    "LazyLoggerAdapter",
    "LazyString",
    "configure_logging",
    "get_lazy_logger",
    "reset_logging_state",
    "setup_logging",
]
