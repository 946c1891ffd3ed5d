"""
Tests for structured logging configuration.
"""

import logging

import pytest
import structlog
from structlog.contextvars import get_contextvars

from apps.core.logging import (
    REDACTED,
    _add_trace_id,
    _redact_sensitive_values,
    bind_contextvars,
    clear_contextvars,
    configure_logging,
    get_logger,
)


class TestConfigureLogging:
    """Tests for configure_logging function."""

    def test_configure_logging_json_format(self) -> None:
        """Should install a JSON renderer on the root handler."""
        configure_logging(json_format=True, log_level="INFO")

        root_logger = logging.getLogger()
        assert len(root_logger.handlers) == 1
        assert root_logger.level == logging.INFO
        assert structlog.is_configured()

    def test_configure_logging_console_format(self) -> None:
        configure_logging(json_format=False, log_level="DEBUG")

        assert logging.getLogger().level == logging.DEBUG

    def test_unknown_level_falls_back_to_info(self) -> None:
        configure_logging(json_format=True, log_level="CHATTY")

        assert logging.getLogger().level == logging.INFO


class TestGetLogger:
    """Tests for get_logger function."""

    def test_get_logger_returns_bound_logger(self) -> None:
        logger = get_logger("test.module")
        assert logger is not None

    def test_get_logger_with_none_name(self) -> None:
        logger = get_logger(None)
        assert logger is not None


class TestContextVars:
    """Tests for context variable binding."""

    def setup_method(self) -> None:
        clear_contextvars()

    def teardown_method(self) -> None:
        clear_contextvars()

    def test_bind_contextvars_with_dotted_keys(self) -> None:
        """Dotted keys should be bound as-is."""
        bind_contextvars(trace_id="abc123", **{"http.method": "GET", "network.client.ip": "10.0.0.1"})

        ctx = get_contextvars()
        assert ctx["trace_id"] == "abc123"
        assert ctx["http.method"] == "GET"
        assert ctx["network.client.ip"] == "10.0.0.1"

    def test_clear_contextvars_removes_context(self) -> None:
        bind_contextvars(trace_id="abc123")
        clear_contextvars()

        assert get_contextvars().get("trace_id") is None


class TestProcessors:
    """Tests for the custom processors in the chain."""

    def test_request_id_renamed_to_trace_id(self) -> None:
        event = _add_trace_id(logging.getLogger(), "info", {"event": "x", "request_id": 42})

        assert event == {"event": "x", "trace_id": "42"}

    def test_existing_trace_id_untouched(self) -> None:
        event = _add_trace_id(logging.getLogger(), "info", {"event": "x", "trace_id": "t-1"})

        assert event["trace_id"] == "t-1"

    @pytest.mark.parametrize("key", ["token", "refresh_token", "password", "client_secret", "Authorization"])
    def test_sensitive_keys_are_redacted(self, key: str) -> None:
        event = _redact_sensitive_values(logging.getLogger(), "info", {"event": "login", key: "s3cr3t"})

        assert event[key] == REDACTED

    def test_event_name_is_never_redacted(self) -> None:
        event = _redact_sensitive_values(logging.getLogger(), "info", {"event": "token_created"})

        assert event["event"] == "token_created"

    def test_other_keys_are_kept(self) -> None:
        event = _redact_sensitive_values(
            logging.getLogger(), "info", {"event": "x", "username": "ana", "status_code": 401}
        )

        assert event["username"] == "ana"
        assert event["status_code"] == 401


class TestLogOutput:
    """Tests for actual log output."""

    def setup_method(self) -> None:
        clear_contextvars()
        configure_logging(json_format=True, log_level="DEBUG")

    def teardown_method(self) -> None:
        clear_contextvars()

    def test_json_log_output_format(self, caplog: pytest.LogCaptureFixture) -> None:
        logger = get_logger("test.json_output")
        bind_contextvars(trace_id="test-trace-123")

        with caplog.at_level(logging.DEBUG, logger="test.json_output"):
            logger.info("test_event", key="value", count=42)

        assert len(caplog.records) > 0
        assert "test_event" in caplog.text

    def test_log_with_exception(self, caplog: pytest.LogCaptureFixture) -> None:
        logger = get_logger("test.exception")

        with caplog.at_level(logging.DEBUG, logger="test.exception"):
            try:
                raise ValueError("Test error")
            except ValueError:
                logger.exception("error_occurred")

        assert len(caplog.records) > 0
        assert "error_occurred" in caplog.text or "ValueError" in caplog.text
