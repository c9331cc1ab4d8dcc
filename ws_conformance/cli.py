"""CLI entry point for the WebSocket conformance harness."""

import argparse
import asyncio
import json
import logging
import sys

import aiohttp
from pydantic import ValidationError

from ws_conformance.errors import FatalUnavailableError
from ws_conformance.log_levels import FAIL
from ws_conformance.models.config import DEFAULT_URL, HarnessConfig
from ws_conformance.probes import build_probes
from ws_conformance.reporter import (
    SEPARATOR,
    configure_logging,
    format_output,
    log_results_summary,
)
from ws_conformance.sequencer import TestSequencer


async def run(config: HarnessConfig) -> int:
    """Run the probe battery and return exit code."""
    log = logging.getLogger("ws_conformance")

    async with aiohttp.ClientSession() as session:
        sequencer = TestSequencer(
            config=config,
            session=session,
            probes=build_probes(config, session),
        )
        try:
            result_log = await sequencer.run()
        except FatalUnavailableError as exc:
            log.log(FAIL, "Cannot connect to %s", exc.url)
            log.info("Please make sure the WebSocket server under test is running")
            return 1

    log_results_summary(log, result_log)
    print(json.dumps(format_output(result_log), indent=2))

    return 1 if result_log.failed_count else 0


def log_banner(log: logging.Logger, config: HarnessConfig) -> None:
    """Log the run header."""
    log.info(SEPARATOR)
    log.info("WebSocket Server Test Suite")
    log.info(SEPARATOR)
    log.info("Target: %s (timeout=%.1fs)", config.url, config.timeout)


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Run protocol conformance probes against a WebSocket server"
    )
    parser.add_argument(
        "--url",
        default=DEFAULT_URL,
        help=f"WebSocket endpoint under test (default: {DEFAULT_URL})",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=5.0,
        help="Default per-probe timeout in seconds",
    )
    parser.add_argument(
        "--settle-delay",
        type=float,
        default=0.5,
        help="Pause between probes in seconds",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING"],
        help="Minimum level of log output",
    )

    args = parser.parse_args()

    configure_logging(args.log_level)
    log = logging.getLogger("ws_conformance")

    try:
        config = HarnessConfig(
            url=args.url, timeout=args.timeout, settle_delay=args.settle_delay
        )
    except ValidationError as exc:
        parser.error(str(exc))

    log_banner(log, config)

    try:
        exit_code = asyncio.run(run(config))
    except Exception as exc:
        log.log(FAIL, "Fatal error: %s", exc, exc_info=exc)
        exit_code = 1
    sys.exit(exit_code)


if __name__ == "__main__":  # pragma: no cover
    main()
