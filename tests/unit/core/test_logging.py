"""Tests for structured logging configuration."""

from __future__ import annotations

import io
import json

import pytest
import structlog

from mesa_engine.core.logging import (
    configure_logging,
    engine_name_processor,
    get_logger,
    log_context,
)


class TestEngineNameProcessor:
    """Tests for the engine name processor."""

    def test_stamps_name(self) -> None:
        """Test the configured name is added to events."""
        event = engine_name_processor("mesa-hub")(None, "info", {"event": "x"})
        assert event["engine"] == "mesa-hub"

    def test_keeps_explicit_value(self) -> None:
        """Test an explicit engine key wins."""
        event = engine_name_processor("mesa-hub")(None, "info", {"event": "x", "engine": "other"})
        assert event["engine"] == "other"


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_console_output(self) -> None:
        """Test console rendering writes to the given stream."""
        stream = io.StringIO()
        configure_logging(level="DEBUG", json_format=False, stream=stream)

        get_logger("tests").info("Damage applied", amount=7)

        assert "Damage applied" in stream.getvalue()
        assert "amount=7" in stream.getvalue()

    def test_level_filtering(self) -> None:
        """Test events below the level are dropped."""
        stream = io.StringIO()
        configure_logging(level="WARNING", json_format=True, stream=stream)

        get_logger("tests").info("Dice rolled")
        get_logger("tests").warning("Budget pool is empty")

        lines = stream.getvalue().splitlines()
        assert [json.loads(line)["event"] for line in lines] == ["Budget pool is empty"]

    def test_defaults_from_settings(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test format and engine name come from the settings."""
        monkeypatch.setenv("MESA_ENGINE_LOG_JSON", "true")
        monkeypatch.setenv("MESA_ENGINE_APP_NAME", "mesa-hub")
        stream = io.StringIO()
        configure_logging(stream=stream)

        get_logger("tests").info("Encounter saved", entries=3)

        event = json.loads(stream.getvalue())
        assert event["event"] == "Encounter saved"
        assert event["engine"] == "mesa-hub"
        assert event["level"] == "info"


class TestLogContext:
    """Tests for per-operation context."""

    def test_binds_inside_block(self, captured_logs: io.StringIO) -> None:
        """Test identifiers reach events logged inside the block only."""
        logger = get_logger("tests")

        with log_context(encounter_id="enc-1", character_id=None):
            logger.info("Entry added")
        logger.info("Encounter closed")

        inside, outside = (json.loads(line) for line in captured_logs.getvalue().splitlines())
        assert inside["encounter_id"] == "enc-1"
        assert "character_id" not in inside
        assert "encounter_id" not in outside

    def test_nested_blocks_restore(self) -> None:
        """Test an inner block restores the outer binding on exit."""
        with log_context(encounter_id="enc-1"):
            with log_context(encounter_id="enc-2"):
                assert structlog.contextvars.get_contextvars()["encounter_id"] == "enc-2"
            assert structlog.contextvars.get_contextvars()["encounter_id"] == "enc-1"

        assert "encounter_id" not in structlog.contextvars.get_contextvars()
