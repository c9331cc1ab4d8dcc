"""Abstract base class for conformance probes."""

import asyncio
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import ClassVar

import aiohttp

from ws_conformance.connection import ConnectionHandle
from ws_conformance.errors import ProbeError
from ws_conformance.log_levels import TEST
from ws_conformance.models.result import TestResult

log = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class Probe(ABC):
    """One self-contained check of a single protocol behavior.

    Subclasses implement ``check``, which races the behavior against its own
    timeout and either returns the details of a pass or raises. ``run`` turns
    every outcome into exactly one ``TestResult``.
    """

    name: ClassVar[str]
    description: ClassVar[str]
    timeout_detail: ClassVar[str] = "Timeout"

    session: aiohttp.ClientSession = field(repr=False)
    url: str
    timeout: float = 5.0
    close_timeout: float = 2.0

    @abstractmethod
    async def check(self) -> str:
        """Exercise the behavior against the server.

        Returns:
            Details to attach to the passing result (may be empty)

        Raises:
            ProbeError: If the server does not behave as expected
            TimeoutError: If no terminal event arrives in time

        """

    async def run(self) -> TestResult:
        """Run the probe and return its verdict."""
        log.log(TEST, "Testing %s...", self.description)
        loop = asyncio.get_running_loop()
        started = loop.time()

        try:
            details = await self.check()
        except ProbeError as exc:
            return self._result(False, str(exc), started)
        except TimeoutError:
            return self._result(False, self.timeout_detail, started)
        except Exception as exc:
            log.error("Probe %s raised unexpectedly: %s", self.name, exc, exc_info=exc)
            return self._result(False, str(exc) or type(exc).__name__, started)

        return self._result(True, details, started)

    def connection(self, *, autoping: bool = True) -> ConnectionHandle:
        """Create a handle to the target endpoint owned by this probe."""
        return ConnectionHandle(
            self.session, self.url, autoping=autoping, close_timeout=self.close_timeout
        )

    def _result(self, passed: bool, details: str, started: float) -> TestResult:
        duration = asyncio.get_running_loop().time() - started
        return TestResult(
            name=self.name, passed=passed, details=details, duration=duration
        )
