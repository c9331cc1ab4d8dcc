"""Sequencer running the probe battery against one endpoint."""

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

import aiohttp

from ws_conformance.errors import FatalUnavailableError
from ws_conformance.log_levels import PASS
from ws_conformance.models.config import HarnessConfig
from ws_conformance.models.result import ResultLog
from ws_conformance.precheck import check_availability
from ws_conformance.probes.base import Probe
from ws_conformance.reporter import log_result

log = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class TestSequencer:
    """Runs the availability check, then each probe strictly in order."""

    __test__ = False

    config: HarnessConfig
    session: aiohttp.ClientSession = field(repr=False)
    probes: Sequence[Probe]

    async def run(self) -> ResultLog:
        """Run every probe and collect the verdicts.

        Probes never overlap: each one completes before the settling delay
        and the next probe start.

        Returns:
            The verdicts in execution order

        Raises:
            FatalUnavailableError: If the endpoint cannot be reached, in which
                case no probe runs

        """
        log.info("Checking server availability...")
        if not await check_availability(
            self.session, self.config.url, self.config.precheck_timeout
        ):
            raise FatalUnavailableError(self.config.url)
        log.log(PASS, "Server is available at %s", self.config.url)

        result_log = ResultLog()
        for index, probe in enumerate(self.probes):
            if index:
                await asyncio.sleep(self.config.settle_delay)
            result = await probe.run()
            result_log.record(result)
            log_result(log, result)

        log.info("Probe execution completed")
        return result_log
