"""Unit tests for logging configuration, JSON formatting and lazy logging."""
from __future__ import annotations

import json
import logging
import sys

import pytest
from opentelemetry import trace
from opentelemetry.trace import NonRecordingSpan, SpanContext, TraceFlags

from node_service.core.settings.logs import LoggingSettings
from node_service.infra.logging import config as logging_config
from node_service.infra.logging.config import configure_logging, setup_logging
from node_service.infra.logging.formatters import JSONFormatter
from node_service.infra.logging.lazy import get_lazy_logger


def _record(msg="hello", level=logging.INFO, **extra) -> logging.LogRecord:
    record = logging.LogRecord("repository.Model", level, __file__, 1, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@pytest.fixture
def restore_root_logger():
    """Put root logger handlers and level back after dictConfig tests."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    logging.captureWarnings(False)


@pytest.mark.unit
class TestJSONFormatter:
    """Structured JSONL output."""

    def test_basic_fields(self):
        payload = json.loads(JSONFormatter().format(_record()))

        assert payload["level"] == "INFO"
        assert payload["logger"] == "repository.Model"
        assert payload["message"] == "hello"
        assert payload["timestamp"].endswith("Z")

    def test_extras_and_static_fields(self):
        formatter = JSONFormatter(static={"service": "node-service"})
        record = _record(entity="Model", id="abc", operation="db.retrieve")

        payload = json.loads(formatter.format(record))

        assert payload["service"] == "node-service"
        assert payload["entity"] == "Model"
        assert payload["id"] == "abc"
        assert payload["operation"] == "db.retrieve"
        assert "args" not in payload

    def test_exception_is_single_line(self):
        try:
            raise ValueError("boom")
        except ValueError:
            record = _record(level=logging.ERROR)
            record.exc_info = sys.exc_info()

        output = JSONFormatter().format(record)

        assert "\n" not in output
        assert "ValueError: boom" in json.loads(output)["exception"]

    def test_trace_correlation(self):
        context = SpanContext(
            trace_id=0x1234,
            span_id=0x5678,
            is_remote=False,
            trace_flags=TraceFlags(TraceFlags.SAMPLED),
        )
        with trace.use_span(NonRecordingSpan(context)):
            payload = json.loads(JSONFormatter().format(_record()))

        assert payload["trace_id"] == format(0x1234, "032x")
        assert payload["span_id"] == format(0x5678, "016x")

    def test_no_trace_without_span(self):
        payload = json.loads(JSONFormatter().format(_record()))
        assert "trace_id" not in payload


@pytest.mark.unit
class TestConfigureLogging:
    """dictConfig setup."""

    def test_json_console(self, restore_root_logger):
        config = configure_logging("debug", service_name="svc", json_logs=True)

        assert config["root"]["level"] == "DEBUG"
        assert config["handlers"]["console"]["formatter"] == "json"
        assert config["formatters"]["json"]["static"] == {"service": "svc"}
        assert isinstance(logging.getLogger().handlers[0].formatter, JSONFormatter)

    def test_text_console(self, restore_root_logger):
        config = configure_logging("INFO", json_logs=False)
        assert config["handlers"]["console"]["formatter"] == "text"

    def test_rotating_file(self, tmp_path, restore_root_logger):
        log_file = tmp_path / "logs" / "service.jsonl"
        config = configure_logging(
            "INFO",
            file_path=log_file,
            file_max_bytes=2048,
            file_backup_count=2,
            console_enabled=False,
        )

        assert list(config["handlers"]) == ["file"]
        assert config["handlers"]["file"]["maxBytes"] == 2048
        assert log_file.parent.is_dir()

        logging.getLogger("repository.Model").warning("written", extra={"id": "1"})
        for handler in logging.getLogger().handlers:
            handler.flush()
        assert json.loads(log_file.read_text().splitlines()[-1])["id"] == "1"

    def test_setup_logging_runs_once(self, monkeypatch, restore_root_logger):
        calls = []
        monkeypatch.setattr(logging_config, "_LOGGING_INITIALIZED", False)
        monkeypatch.setattr(logging_config, "configure_logging", lambda **kw: calls.append(kw))

        setup_logging(LoggingSettings(level="WARNING"))
        setup_logging(LoggingSettings(level="DEBUG"))
        setup_logging(LoggingSettings(level="ERROR"), force=True, console_enabled=False)

        assert [call["log_level"] for call in calls] == ["WARNING", "ERROR"]
        assert calls[1]["console_enabled"] is False


@pytest.mark.unit
class TestLazyLogger:
    """Deferred message construction."""

    def test_callable_not_evaluated_when_disabled(self):
        logger = get_lazy_logger("tests.lazy.disabled")
        logger.logger.setLevel(logging.INFO)
        calls = []

        logger.debug(lambda: calls.append("evaluated") or "message")

        assert calls == []

    def test_callable_evaluated_when_enabled(self, caplog):
        logger = get_lazy_logger("tests.lazy.enabled")
        with caplog.at_level(logging.DEBUG, logger="tests.lazy.enabled"):
            logger.debug(lambda: "computed message")
            logger.info("count=%s", lambda: 3)

        assert "computed message" in caplog.text
        assert "count=3" in caplog.text

    def test_context_is_bound(self, caplog):
        logger = get_lazy_logger("tests.lazy.context", collection="c1")
        with caplog.at_level(logging.INFO, logger="tests.lazy.context"):
            logger.info("hello")

        assert caplog.records[-1].collection == "c1"
