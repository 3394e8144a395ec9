"""Tests for logging configuration."""

from __future__ import annotations

import io
import json
from collections.abc import Generator
from typing import Any

import pytest
import structlog

from jobquest.core.logging import bind_context, configure_logging, get_logger


@pytest.fixture(autouse=True)
def restore_structlog() -> Generator[None, None, None]:
    """Put structlog back to its defaults after each test."""
    yield
    structlog.reset_defaults()


def last_record(stream: io.StringIO) -> dict[str, Any]:
    """Decode the final JSON line written to the stream."""
    return json.loads(stream.getvalue().strip().splitlines()[-1])


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_json_output(self) -> None:
        """Test JSON lines carry the event, level and app name."""
        stream = io.StringIO()
        configure_logging(level="INFO", json_format=True, stream=stream)

        get_logger("tests.logging").info("Party built", members=["hero"])

        record = last_record(stream)
        assert record["event"] == "Party built"
        assert record["level"] == "info"
        assert record["app"] == "JobQuest"
        assert record["members"] == ["hero"]
        assert "timestamp" in record

    def test_level_filtering(self) -> None:
        """Test events below the configured level are dropped."""
        stream = io.StringIO()
        configure_logging(level="WARNING", json_format=True, stream=stream)

        get_logger("tests.logging").info("Encounter started")

        assert stream.getvalue() == ""

    def test_bound_context(self) -> None:
        """Test bound context appears on later events."""
        stream = io.StringIO()
        configure_logging(level="INFO", json_format=True, stream=stream)
        bind_context(campaign_id="run-1")

        get_logger("tests.logging").info("Encounter recorded")

        assert last_record(stream)["campaign_id"] == "run-1"

    def test_console_output(self) -> None:
        """Test the development renderer writes readable lines."""
        stream = io.StringIO()
        configure_logging(level="DEBUG", json_format=False, stream=stream)

        get_logger("tests.logging").debug("Dice rolled", expression="1d20")

        assert "Dice rolled" in stream.getvalue()
        assert "1d20" in stream.getvalue()

    def test_defaults_from_settings(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test level and format default to the application settings."""
        monkeypatch.setenv("JOBQUEST_LOG_LEVEL", "WARNING")
        monkeypatch.setenv("JOBQUEST_JSON_LOGS", "true")
        stream = io.StringIO()
        configure_logging(stream=stream)

        logger = get_logger("tests.logging")
        logger.info("Encounter started")
        logger.warning("Skipping unknown job", job_id="ninja")

        lines = stream.getvalue().strip().splitlines()
        assert len(lines) == 1
        assert json.loads(lines[0])["job_id"] == "ninja"

    def test_app_name_from_settings(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test the app tag follows the configured application name."""
        monkeypatch.setenv("JOBQUEST_APP_NAME", "JobQuest Arena")
        stream = io.StringIO()
        configure_logging(level="INFO", json_format=True, stream=stream)

        get_logger("tests.logging").info("Campaign started")

        assert last_record(stream)["app"] == "JobQuest Arena"

    def test_explicit_app_name(self) -> None:
        """Test an explicit app name overrides the settings."""
        stream = io.StringIO()
        configure_logging(level="INFO", json_format=True, stream=stream, app_name="trainer")

        get_logger("tests.logging").info("Training started")

        assert last_record(stream)["app"] == "trainer"

    def test_debug_lowers_default_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test debug mode logs debug events despite a higher log level."""
        monkeypatch.setenv("JOBQUEST_LOG_LEVEL", "WARNING")
        monkeypatch.setenv("JOBQUEST_DEBUG", "true")
        stream = io.StringIO()
        configure_logging(json_format=True, stream=stream)

        get_logger("tests.logging").debug("Dice rolled", expression="1d20")

        assert last_record(stream)["expression"] == "1d20"

    def test_explicit_level_ignores_debug(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test an explicit level wins over debug mode."""
        monkeypatch.setenv("JOBQUEST_DEBUG", "true")
        stream = io.StringIO()
        configure_logging(level="ERROR", json_format=True, stream=stream)

        get_logger("tests.logging").warning("Skipping unknown job")

        assert stream.getvalue() == ""
