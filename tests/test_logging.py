"""Tests for logging configuration."""

import json
import logging
import sys

import pytest

from company_settings.core.logging import (
    BearerRedactionFilter,
    JSONFormatter,
    get_logger,
    redact_bearer,
    setup_logging,
)

TOKEN = "pd-token-0123456789abcdef"


@pytest.fixture(autouse=True)
def restore_root_logger():
    saved_handlers = logging.root.handlers[:]
    saved_level = logging.root.level
    yield
    logging.root.handlers = saved_handlers
    logging.root.setLevel(saved_level)


def make_record(msg, args=None, level=logging.INFO, exc_info=None) -> logging.LogRecord:
    return logging.LogRecord("company_settings.test", level, __file__, 1, msg, args, exc_info)


class TestRedaction:
    """Tests for bearer token masking."""

    def test_redact_bearer_keeps_preview(self):
        assert redact_bearer(f"Authorization: Bearer {TOKEN}") == (
            "Authorization: Bearer pd-token-0..."
        )

    def test_text_without_token_unchanged(self):
        assert redact_bearer("GET /setting/company/1") == "GET /setting/company/1"

    def test_filter_rewrites_formatted_message(self):
        record = make_record("headers=%s", ({"Authorization": f"Bearer {TOKEN}"},))

        assert BearerRedactionFilter().filter(record) is True
        assert TOKEN not in record.getMessage()
        assert "Bearer pd-token-0..." in record.getMessage()


class TestJSONFormatter:
    """Tests for structured log output."""

    def test_escapes_multiline_messages(self):
        entry = json.loads(JSONFormatter().format(make_record('value "a"\nnext')))

        assert entry["message"] == 'value "a"\nnext'
        assert entry["level"] == "INFO"
        assert entry["logger"] == "company_settings.test"
        assert "environment" not in entry

    def test_environment_extra(self):
        record = make_record("attempt failed", level=logging.WARNING)
        record.environment = "ac"

        assert json.loads(JSONFormatter().format(record))["environment"] == "ac"

    def test_includes_exception(self):
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = make_record("failed", level=logging.ERROR, exc_info=sys.exc_info())

        entry = json.loads(JSONFormatter().format(record))

        assert "RuntimeError: boom" in entry["exception"]


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_structured_format_installs_json_handler(self):
        setup_logging(level="WARNING", format_type="structured")

        [handler] = logging.root.handlers
        assert isinstance(handler.formatter, JSONFormatter)
        assert handler.stream is sys.stderr
        assert logging.root.level == logging.WARNING

    def test_dev_format_sets_level(self):
        setup_logging(level="DEBUG", format_type="dev")

        assert logging.root.level == logging.DEBUG
        assert logging.getLogger("httpx").level == logging.DEBUG

    def test_handler_redacts_tokens(self):
        setup_logging(level="INFO")

        [handler] = logging.root.handlers
        assert any(isinstance(f, BearerRedactionFilter) for f in handler.filters)

    def test_http_client_loggers_quiet_outside_debug(self):
        setup_logging(level="INFO")

        assert logging.getLogger("httpx").level == logging.WARNING
        assert logging.getLogger("uvicorn.access").level == logging.WARNING

    def test_get_logger_prefix(self):
        assert get_logger("main").name == "company_settings.main"
