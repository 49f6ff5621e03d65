"""Unit tests for logging configuration, formatting and lazy evaluation."""
from __future__ import annotations

import json
import logging
import logging.config
import sys

import pytest

from leaderboard_service.core.settings import LoggingSettings
from leaderboard_service.infra.logging import (
    JSONFormatter,
    LazyString,
    configure_logging,
    get_lazy_logger,
    reset_logging_state,
    setup_logging,
)

pytestmark = pytest.mark.unit


def _record(msg: str = "Game created", **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="repository.Game",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter:
    """Tests for JSON Lines output."""

    def test_core_fields(self):
        line = JSONFormatter(static={"service": "leaderboard-service"}).format(_record())

        data = json.loads(line)
        assert data["level"] == "INFO"
        assert data["logger"] == "repository.Game"
        assert data["message"] == "Game created"
        assert data["service"] == "leaderboard-service"
        assert data["timestamp"].endswith("Z")

    def test_extra_fields_copied_to_top_level(self):
        record = _record(game_hex_id="a1b2c3", operation="db.create_game")

        data = json.loads(JSONFormatter().format(record))

        assert data["game_hex_id"] == "a1b2c3"
        assert data["operation"] == "db.create_game"
        assert "args" not in data
        assert "msg" not in data

    def test_one_record_is_one_line(self):
        try:
            raise RuntimeError("boom\nsecond line")
        except RuntimeError:
            record = logging.LogRecord(
                "x", logging.ERROR, __file__, 1, "failed", (), exc_info=sys.exc_info()
            )

        line = JSONFormatter().format(record)

        assert "\n" not in line
        assert "RuntimeError" in json.loads(line)["exception"]

    def test_no_trace_fields_without_span(self):
        data = json.loads(JSONFormatter().format(_record()))

        assert "trace_id" not in data

    def test_process_and_thread_info(self):
        formatter = JSONFormatter(include_process_info=True, include_thread_info=True)

        data = json.loads(formatter.format(_record()))

        assert "process_id" in data
        assert "thread_name" in data

    def test_non_serializable_extra_uses_str(self):
        data = json.loads(JSONFormatter().format(_record(value=object())))

        assert data["value"].startswith("<object object")


class TestLazyLogger:
    """Tests for lazily evaluated messages."""

    def test_callable_not_evaluated_when_disabled(self, caplog):
        calls = []
        logger = get_lazy_logger("tests.lazy.disabled")

        with caplog.at_level(logging.INFO, logger="tests.lazy.disabled"):
            logger.debug(lambda: calls.append("called") or "message")

        assert calls == []
        assert caplog.records == []

    def test_callable_evaluated_when_enabled(self, caplog):
        logger = get_lazy_logger("tests.lazy.enabled")

        with caplog.at_level(logging.DEBUG, logger="tests.lazy.enabled"):
            logger.debug(lambda: "db.list: 3 rows")

        assert caplog.records[0].getMessage() == "db.list: 3 rows"

    def test_bound_context_merged_into_extra(self, caplog):
        logger = get_lazy_logger("tests.lazy.context", repository="ScoreRepository")

        with caplog.at_level(logging.INFO, logger="tests.lazy.context"):
            logger.info("listed", extra={"operation": "db.list"})

        record = caplog.records[0]
        assert record.repository == "ScoreRepository"
        assert record.operation == "db.list"

    def test_lazy_string(self):
        value = LazyString(lambda: 1 + 1)

        assert str(value) == "2"


class TestConfigureLogging:
    """Tests for dictConfig assembly."""

    @pytest.fixture
    def captured_config(self, monkeypatch):
        captured = {}
        monkeypatch.setattr(logging.config, "dictConfig", lambda config: captured.update(config))
        monkeypatch.setattr(logging, "captureWarnings", lambda _flag: None)
        return captured

    def test_json_console(self, captured_config):
        config = configure_logging("debug", json_logs=True)

        assert config is not None
        assert captured_config["root"] == {"level": "DEBUG", "handlers": ["console"]}
        assert captured_config["handlers"]["console"]["formatter"] == "json"
        assert captured_config["formatters"]["json"]["static"] == {"service": "leaderboard-service"}

    def test_text_and_file(self, captured_config, tmp_path):
        path = tmp_path / "logs" / "app.log"

        configure_logging(json_logs=False, file_path=path, console_enabled=False)

        assert list(captured_config["handlers"]) == ["file"]
        assert captured_config["handlers"]["file"]["formatter"] == "text"
        assert path.parent.is_dir()

    def test_sqlalchemy_logger_level(self, captured_config):
        configure_logging(sql_echo_level="info")

        assert captured_config["loggers"]["sqlalchemy.engine"] == {"level": "INFO"}

    def test_setup_logging_runs_once(self, captured_config, monkeypatch):
        reset_logging_state()
        calls = []
        monkeypatch.setattr(
            "leaderboard_service.infra.logging.config.configure_logging",
            lambda **kwargs: calls.append(kwargs),
        )
        settings = LoggingSettings(level="WARNING")

        setup_logging(settings)
        setup_logging(settings)
        setup_logging(settings, force=True, log_level="ERROR")
        reset_logging_state()

        assert len(calls) == 2
        assert calls[0]["log_level"] == "WARNING"
        assert calls[1]["log_level"] == "ERROR"
