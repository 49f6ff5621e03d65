"""Logging configuration setup.

Builds a ``logging.config.dictConfig`` dict from LoggingSettings:
- handlers on the root logger only (application loggers propagate)
- JSON Lines or plain text output
- optional size-rotated log file
"""

from __future__ import annotations

import logging
import logging.config
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from leaderboard_service.core.settings.logs import LoggingSettings

logger = logging.getLogger(__name__)
_LOGGING_INITIALIZED = False


def setup_logging(
    log_settings: LoggingSettings | None = None,
    *,
    force: bool = False,
    **configure_kwargs: Any,
) -> None:
    """Ensure logging is configured once across entrypoints.

    Args:
        log_settings: Optional logging settings instance. If omitted, settings
            are loaded via get_logging_settings().
        force: Reconfigure logging even if it was already initialized.
        **configure_kwargs: Explicit overrides for configure_logging().
    """
    global _LOGGING_INITIALIZED

    if _LOGGING_INITIALIZED and not force:
        return

    if log_settings is None:
        from leaderboard_service.core.settings import get_logging_settings

        log_settings = get_logging_settings()

    log_config = {**log_settings.to_logging_kwargs(), **configure_kwargs}
    configure_logging(**log_config)
    _LOGGING_INITIALIZED = True


def configure_logging(
    log_level: str = "INFO",
    *,
    service_name: str = "leaderboard-service",
    json_logs: bool = True,
    console_enabled: bool = True,
    file_path: str | Path | None = None,
    file_max_bytes: int = 10 * 1024 * 1024,
    file_backup_count: int = 5,
    capture_warnings: bool = True,
    include_process_info: bool = False,
    include_thread_info: bool = False,
    sql_echo_level: str = "WARNING",
) -> dict[str, Any]:
    """Configure the root logger with dictConfig.

    Args:
        log_level: Root logger level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        service_name: Static ``service`` field on JSON lines.
        json_logs: Enable JSONL (JSON Lines) structured logging.
        console_enabled: Enable console/stderr logging.
        file_path: Path to log file. None disables file logging.
        file_max_bytes: Maximum log file size before rotation.
        file_backup_count: Number of rotated log files to keep.
        capture_warnings: Forward Python warnings to logging system.
        include_process_info: Include process ID and name in records.
        include_thread_info: Include thread ID and name in records.
        sql_echo_level: Level of the ``sqlalchemy.engine`` logger.

    Returns:
        The dict passed to dictConfig.

    Example:
        from leaderboard_service.core.settings import get_logging_settings
        configure_logging(**get_logging_settings().to_logging_kwargs())
    """
    formatter = "json" if json_logs else "text"
    handlers: dict[str, Any] = {}

    if console_enabled:
        handlers["console"] = {
            "class": "logging.StreamHandler",
            "formatter": formatter,
            "stream": "ext://sys.stderr",
        }

    if file_path:
        path = Path(file_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "formatter": formatter,
            "filename": str(path),
            "maxBytes": file_max_bytes,
            "backupCount": file_backup_count,
            "encoding": "utf-8",
        }

    config: dict[str, Any] = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": _build_formatters_config(
            service_name=service_name,
            include_process_info=include_process_info,
            include_thread_info=include_thread_info,
        ),
        "handlers": handlers,
        "loggers": {
            "sqlalchemy.engine": {"level": sql_echo_level.upper()},
        },
        "root": {
            "level": log_level.upper(),
            "handlers": list(handlers),
        },
    }

    logging.config.dictConfig(config)
    logging.captureWarnings(capture_warnings)
    logger.debug("Logging configured: level=%s json=%s", log_level, json_logs)
    return config


def _build_formatters_config(
    *,
    service_name: str,
    include_process_info: bool,
    include_thread_info: bool,
) -> dict[str, Any]:
    """Build formatters configuration for dictConfig."""
    from leaderboard_service.infra.logging.formatters import TEXT_DATEFMT, TEXT_FORMAT

    text_parts = ["%(asctime)s", "%(levelname)s", "%(name)s"]
    if include_process_info:
        text_parts.append("[%(processName)s:%(process)d]")
    if include_thread_info:
        text_parts.append("[%(threadName)s:%(thread)d]")
    text_parts.append("%(message)s")
    text_format = " - ".join(text_parts) if len(text_parts) > 4 else TEXT_FORMAT

    return {
        "json": {
            "()": "leaderboard_service.infra.logging.formatters.JSONFormatter",
            "static": {"service": service_name},
            "include_process_info": include_process_info,
            "include_thread_info": include_thread_info,
        },
        "text": {
            "format": text_format,
            "datefmt": TEXT_DATEFMT,
        },
    }


def reset_logging_state() -> None:
    """Allow the next setup_logging() call to reconfigure (used by tests)."""
    global _LOGGING_INITIALIZED
    _LOGGING_INITIALIZED = False


__all__ = ["configure_logging", "reset_logging_state", "setup_logging"]
