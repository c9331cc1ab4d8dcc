"""Log formatting and result reporting."""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, TextIO

from ws_conformance.log_levels import FAIL, PASS, TEST
from ws_conformance.models.result import ResultLog, TestResult

SEPARATOR = "=" * 60

LEVEL_TAGS = {
    TEST: "TEST",
    PASS: "PASS",
    FAIL: "FAIL",
}


class HarnessFormatter(logging.Formatter):
    """Formats records as ``<ISO-8601 UTC timestamp> [<TAG>] <message>``.

    Tags are limited to INFO, TEST, PASS and FAIL: warnings and errors from
    any logger render as FAIL, everything below INFO as INFO.
    """

    def __init__(self) -> None:
        super().__init__("%(asctime)s [%(tag)s] %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        record.tag = level_tag(record.levelno)
        return super().format(record)

    def formatTime(  # noqa: N802
        self, record: logging.LogRecord, datefmt: str | None = None
    ) -> str:
        timestamp = datetime.fromtimestamp(record.created, tz=timezone.utc)
        iso = timestamp.isoformat(timespec="milliseconds")
        return iso.replace("+00:00", "Z")


def level_tag(levelno: int) -> str:
    """Map a logging level to one of the harness tags."""
    if tag := LEVEL_TAGS.get(levelno):
        return tag
    return "FAIL" if levelno >= logging.WARNING else "INFO"


def configure_logging(level: str = "INFO", stream: TextIO | None = None) -> None:
    """Send harness logs to ``stream`` (stderr by default)."""
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(HarnessFormatter())
    logging.basicConfig(level=level, handlers=[handler], force=True)


def log_result(log: logging.Logger, result: TestResult) -> None:
    """Log a single verdict as it is recorded."""
    if result.passed:
        if result.details:
            log.log(PASS, "PASS: %s (%s)", result.name, result.details)
        else:
            log.log(PASS, "PASS: %s", result.name)
    else:
        log.log(FAIL, "FAIL: %s - %s", result.name, result.details)


def log_results_summary(log: logging.Logger, result_log: ResultLog) -> None:
    """Log the final summary block with counts and failing probes."""
    log.info("")
    log.info(SEPARATOR)
    log.info("Test Results Summary")
    log.info(SEPARATOR)
    log.info("Total Tests: %d", result_log.total)
    log.log(PASS, "Passed: %d", result_log.passed_count)
    log.log(
        FAIL if result_log.failed_count else logging.INFO,
        "Failed: %d",
        result_log.failed_count,
    )
    log.info(SEPARATOR)

    if failures := result_log.failures:
        log.info("")
        log.log(FAIL, "Failed Tests:")
        for result in failures:
            log.log(FAIL, "  - %s: %s", result.name, result.details)


def format_output(result_log: ResultLog) -> dict[str, Any]:
    """Format verdicts for JSON output."""
    return {
        "total": result_log.total,
        "passed": result_log.passed_count,
        "failed": result_log.failed_count,
        "results": [
            {
                "name": result.name,
                "passed": result.passed,
                "details": result.details,
                "duration": round(result.duration, 3),
            }
            for result in result_log.results
        ],
    }
