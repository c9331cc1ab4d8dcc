"""Tests for log formatting and result reporting."""

import io
import logging
from datetime import datetime, timezone
from unittest.mock import patch

import pytest

from ws_conformance.log_levels import FAIL, PASS, TEST
from ws_conformance.models.result import ResultLog, TestResult
from ws_conformance.reporter import (
    HarnessFormatter,
    configure_logging,
    format_output,
    level_tag,
    log_result,
    log_results_summary,
)

CREATED = datetime(2026, 1, 2, 3, 4, 5, 500000, tzinfo=timezone.utc)


def make_record(levelno: int, msg: str, *args: object) -> logging.LogRecord:
    record = logging.LogRecord("ws_conformance", levelno, __file__, 1, msg, args, None)
    record.created = CREATED.timestamp()
    return record


@pytest.fixture
def result_log() -> ResultLog:
    """Log with two passing verdicts and one failure."""
    result_log = ResultLog()
    result_log.record(TestResult(name="Handshake", passed=True, duration=0.01234))
    result_log.record(
        TestResult(name="Ping/Pong", passed=True, details="Pong received", duration=0.2)
    )
    result_log.record(
        TestResult(name="Close Handshake", passed=False, details="Timeout", duration=5)
    )
    return result_log


class TestHarnessFormatter:
    """Tests for HarnessFormatter."""

    def test_formats_timestamp_tag_and_message(self) -> None:
        """Renders an ISO-8601 UTC timestamp with milliseconds and the tag."""
        record = make_record(PASS, "PASS: %s", "Handshake")

        line = HarnessFormatter().format(record)

        assert line == "2026-01-02T03:04:05.500Z [PASS] PASS: Handshake"

    @pytest.mark.parametrize(
        ("levelno", "tag"),
        [
            (logging.DEBUG, "INFO"),
            (logging.INFO, "INFO"),
            (TEST, "TEST"),
            (PASS, "PASS"),
            (logging.WARNING, "FAIL"),
            (FAIL, "FAIL"),
            (logging.ERROR, "FAIL"),
        ],
    )
    def test_maps_levels_to_tags(self, levelno: int, tag: str) -> None:
        """Every level renders as one of the four harness tags."""
        assert level_tag(levelno) == tag

    def test_custom_levels_have_names(self) -> None:
        """Custom levels are registered with the logging module."""
        assert logging.getLevelName(TEST) == "TEST"
        assert logging.getLevelName(PASS) == "PASS"
        assert logging.getLevelName(FAIL) == "FAIL"


def test_configure_logging_installs_formatter() -> None:
    """Replaces root handlers with one stream handler using HarnessFormatter."""
    stream = io.StringIO()

    with patch("ws_conformance.reporter.logging.basicConfig") as mock_basic_config:
        configure_logging("DEBUG", stream)

    kwargs = mock_basic_config.call_args.kwargs
    assert kwargs["level"] == "DEBUG"
    assert kwargs["force"] is True
    (handler,) = kwargs["handlers"]
    assert handler.stream is stream
    assert isinstance(handler.formatter, HarnessFormatter)


class TestLogResult:
    """Tests for log_result."""

    def test_pass_without_details(self, caplog: pytest.LogCaptureFixture) -> None:
        """Logs a bare PASS line."""
        with caplog.at_level(logging.INFO):
            log_result(logging.getLogger(), TestResult(name="Handshake", passed=True))

        assert caplog.records[0].levelno == PASS
        assert caplog.records[0].getMessage() == "PASS: Handshake"

    def test_pass_with_details(self, caplog: pytest.LogCaptureFixture) -> None:
        """Appends details in parentheses."""
        result = TestResult(name="Ping/Pong", passed=True, details="Pong received")

        with caplog.at_level(logging.INFO):
            log_result(logging.getLogger(), result)

        assert caplog.records[0].getMessage() == "PASS: Ping/Pong (Pong received)"

    def test_failure(self, caplog: pytest.LogCaptureFixture) -> None:
        """Logs failures at the FAIL level with their details."""
        result = TestResult(name="Text Message", passed=False, details="Timeout")

        with caplog.at_level(logging.INFO):
            log_result(logging.getLogger(), result)

        assert caplog.records[0].levelno == FAIL
        assert caplog.records[0].getMessage() == "FAIL: Text Message - Timeout"


def test_log_results_summary(
    result_log: ResultLog, caplog: pytest.LogCaptureFixture
) -> None:
    """Logs counts followed by the list of failed probes."""
    with caplog.at_level(logging.INFO):
        log_results_summary(logging.getLogger(), result_log)

    messages = [record.getMessage() for record in caplog.records]
    assert "Test Results Summary" in messages
    assert "Total Tests: 3" in messages
    assert "Passed: 2" in messages
    assert "Failed: 1" in messages
    assert messages[-2:] == ["Failed Tests:", "  - Close Handshake: Timeout"]


def test_log_results_summary_all_passed(caplog: pytest.LogCaptureFixture) -> None:
    """Omits the failure list and logs the zero count at INFO."""
    result_log = ResultLog()
    result_log.record(TestResult(name="Handshake", passed=True))

    with caplog.at_level(logging.INFO):
        log_results_summary(logging.getLogger(), result_log)

    failed_line = next(r for r in caplog.records if r.getMessage() == "Failed: 0")
    assert failed_line.levelno == logging.INFO
    assert "Failed Tests:" not in caplog.text


def test_format_output_empty() -> None:
    """Returns zero totals when nothing ran."""
    assert format_output(ResultLog()) == {
        "total": 0,
        "passed": 0,
        "failed": 0,
        "results": [],
    }


def test_format_output(result_log: ResultLog) -> None:
    """Reports totals and one entry per verdict in order."""
    output = format_output(result_log)

    assert output["total"] == 3
    assert output["passed"] == 2
    assert output["failed"] == 1
    assert output["results"][0] == {
        "name": "Handshake",
        "passed": True,
        "details": "",
        "duration": 0.012,
    }
    assert output["results"][2]["details"] == "Timeout"
