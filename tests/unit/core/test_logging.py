"""Tests for structured logging setup."""

import json
import logging
from collections.abc import Iterator

import pytest

from stackbind.config import LoggingSettings
from stackbind.core.logging import (
    get_logger,
    setup_logging,
    setup_logging_from_settings,
)


@pytest.fixture
def restore_logging() -> Iterator[None]:
    yield
    setup_logging(json_logs=False, log_level_name="DEBUG")


@pytest.mark.unit
@pytest.mark.usefixtures("restore_logging")
class TestSetupLogging:
    """Rendering of structlog events through the standard library."""

    def test_json_lines(self, capsys: pytest.CaptureFixture[str]) -> None:
        setup_logging(json_logs=True, log_level_name="INFO")

        get_logger("stackbind.test").info(
            "api_response_received", status_code=200, category="http"
        )

        line = capsys.readouterr().err.strip().splitlines()[-1]
        event = json.loads(line)
        assert event["event"] == "api_response_received"
        assert event["status_code"] == 200
        assert event["category"] == "http"
        assert event["level"] == "info"
        assert event["logger"] == "stackbind.test"
        assert "timestamp" in event

    def test_default_category(self, capsys: pytest.CaptureFixture[str]) -> None:
        setup_logging(json_logs=True)

        get_logger("stackbind.test").warning("something_happened")

        event = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
        assert event["category"] == "general"

    def test_level_filters_events(self, capsys: pytest.CaptureFixture[str]) -> None:
        setup_logging(json_logs=True, log_level_name="WARNING")

        get_logger("stackbind.test").info("hidden_event")

        assert "hidden_event" not in capsys.readouterr().err

    def test_quiets_transport_loggers(self) -> None:
        setup_logging(log_level_name="DEBUG")

        assert logging.getLogger("httpx").level == logging.WARNING
        assert logging.getLogger("httpcore").level == logging.WARNING
        assert logging.getLogger().level == logging.DEBUG

    def test_console_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        setup_logging(json_logs=False, log_level_name="INFO", console_width=200)

        get_logger("stackbind.test").info("client_closed", category="lifecycle")

        assert "client_closed" in capsys.readouterr().err

    def test_from_settings(self, capsys: pytest.CaptureFixture[str]) -> None:
        setup_logging_from_settings(LoggingSettings(level="error", format="json"))

        get_logger("stackbind.test").warning("dropped_event")
        get_logger("stackbind.test").error("kept_event")

        lines = capsys.readouterr().err.strip().splitlines()
        assert [json.loads(line)["event"] for line in lines] == ["kept_event"]
        assert logging.getLogger().level == logging.ERROR
