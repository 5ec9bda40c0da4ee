"""Tests for logging setup."""

from __future__ import annotations

import json
import logging

from loadburst._internal.logging import _JsonFormatter, get_logger, setup_logging


class TestSetupLogging:
    def test_idempotent(self):
        """Repeated calls update the level without adding handlers."""
        logger = setup_logging(logging.INFO)
        setup_logging(logging.DEBUG)
        assert len(logger.handlers) == 1
        assert logger.level == logging.DEBUG
        assert logger.handlers[0].level == logging.DEBUG
        assert logger.propagate is False

    def test_child_logger_namespace(self):
        assert get_logger("engine.worker").name == "loadburst.engine.worker"


class TestJsonFormatter:
    def test_single_line_json(self):
        record = logging.LogRecord(
            name="loadburst.engine.worker",
            level=logging.WARNING,
            pathname=__file__,
            lineno=1,
            msg="Request failed: %s",
            args=("TimeoutError: ",),
            exc_info=None,
        )
        line = _JsonFormatter().format(record)
        payload = json.loads(line)

        assert "\n" not in line
        assert payload["level"] == "WARNING"
        assert payload["logger"] == "loadburst.engine.worker"
        assert payload["message"] == "Request failed: TimeoutError: "
        assert "timestamp" in payload
        assert "thread" in payload
