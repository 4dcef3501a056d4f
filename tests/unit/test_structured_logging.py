"""
Tests for structured logging configuration.

Validates:
  1. configure_logging() is idempotent (safe to call twice)
  2. the level is applied to the root logger
  3. JSON output mode produces valid JSON
  4. session events carry the bound session_id
  5. user-typed values are replaced by their length before rendering
"""

from __future__ import annotations

import json
import logging

import pytest
import structlog

from frank.core.logging import configure_logging, redact_user_text
from frank.core.session.conversation import ConversationSession


class TestConfigureLogging:
    def setup_method(self) -> None:
        logging.getLogger().handlers.clear()
        structlog.reset_defaults()

    def teardown_method(self) -> None:
        logging.getLogger().handlers.clear()
        structlog.reset_defaults()

    def test_idempotent_double_call(self) -> None:
        configure_logging(level="DEBUG")
        first = len(logging.getLogger().handlers)
        configure_logging(level="DEBUG")
        assert len(logging.getLogger().handlers) == first
        assert first >= 1

    def test_sets_root_log_level(self) -> None:
        configure_logging(level="WARNING")
        assert logging.getLogger().level == logging.WARNING
        configure_logging(level="DEBUG")
        assert logging.getLogger().level == logging.DEBUG

    def test_json_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(level="INFO", json_output=True)
        structlog.get_logger("test.json").info("test_event", count=42)
        line = capsys.readouterr().err.strip().splitlines()[-1]
        data = json.loads(line)
        assert data["event"] == "test_event"
        assert data["count"] == 42
        assert data["level"] == "info"


    def test_json_output_redacts_user_text(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(level="INFO", json_output=True)
        structlog.get_logger("test.redact").info("turn", text="my essay is on volcanoes")
        line = capsys.readouterr().err.strip().splitlines()[-1]
        data = json.loads(line)
        assert "text" not in data
        assert data["text_chars"] == 24
        assert "volcanoes" not in line

    def test_second_call_switches_format(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(level="INFO")
        configure_logging(level="INFO", json_output=True)
        structlog.get_logger("test.switch").info("switched")
        line = capsys.readouterr().err.strip().splitlines()[-1]
        assert json.loads(line)["event"] == "switched"


class TestRedactUserText:
    def test_known_keys_become_lengths(self) -> None:
        out = redact_user_text(None, "info", {"event": "x", "raw_input": "abc", "answer": 7})
        assert out == {"event": "x", "raw_input_chars": 3, "answer_chars": None}

    def test_other_keys_untouched(self) -> None:
        event = {"event": "turn_composed", "signal": "emotional", "actions": 2}
        assert redact_user_text(None, "info", dict(event)) == event


class TestSessionLogContext:
    def test_session_id_is_bound(self) -> None:
        session = ConversationSession(session_id="abc123")
        with structlog.testing.capture_logs() as captured:
            session.reset()
        event = next(e for e in captured if e["event"] == "session_reset")
        assert event["session_id"] == "abc123"

    def test_raw_text_is_not_logged(self) -> None:
        session = ConversationSession(session_id="abc123")
        secret = "my secret homework about volcanoes"
        with structlog.testing.capture_logs() as captured:
            session.submit(secret)
        assert captured
        for event in captured:
            for value in event.values():
                assert secret not in str(value)
