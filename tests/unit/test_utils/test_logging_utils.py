"""
Unit tests for logging utilities.
"""

import json
import logging

import pytest

from quizdrill.utils.logging import (
    JSONFormatter,
    PerformanceTimer,
    _parse_size,
    get_session_logger,
    setup_logging,
)


class TestParseSize:
    """Test cases for _parse_size."""

    @pytest.mark.parametrize("size,expected", [
        ("10MB", 10 * 1024 * 1024),
        ("512KB", 512 * 1024),
        ("1GB", 1024 ** 3),
        ("100B", 100),
        (" 2mb ", 2 * 1024 * 1024),
        ("lots", 10 * 1024 * 1024),
    ])
    def test_sizes(self, size, expected):
        assert _parse_size(size) == expected


class TestSessionLogging:
    """Test cases for session-aware logging."""

    def test_session_logger_adds_context(self, caplog):
        adapter = get_session_logger("ts_1", question_id="q1")

        with caplog.at_level(logging.INFO, logger="quizdrill.session"):
            adapter.info("answer recorded")

        record = caplog.records[-1]
        assert record.session_id == "ts_1"
        assert record.question_id == "q1"

    def test_json_formatter(self):
        record = logging.LogRecord("quizdrill.session", logging.INFO, __file__, 1, "started", None, None)
        record.session_id = "ts_1"

        data = json.loads(JSONFormatter().format(record))

        assert data["message"] == "started"
        assert data["level"] == "INFO"
        assert data["session_id"] == "ts_1"
        assert "question_id" not in data


class TestSetupLogging:
    """Test cases for setup_logging."""

    def test_creates_log_file(self, test_config):
        setup_logging(test_config)
        logging.getLogger("quizdrill.test").info("hello")

        for handler in logging.getLogger().handlers:
            handler.flush()

        assert "hello" in open(test_config.logging.file, encoding="utf-8").read()
        assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING


class TestPerformanceTimer:
    """Test cases for PerformanceTimer."""

    def test_records_duration(self):
        with PerformanceTimer("unit work") as timer:
            pass

        assert timer.duration is not None
        assert timer.duration >= 0

    def test_does_not_swallow_errors(self):
        with pytest.raises(ValueError):
            with PerformanceTimer("failing work"):
                raise ValueError("boom")
