"""Availability check that gates a harness run."""

import asyncio
import logging

import aiohttp

from ws_conformance.connection import ConnectionHandle
from ws_conformance.errors import ConnectivityError

log = logging.getLogger(__name__)


async def check_availability(
    session: aiohttp.ClientSession, url: str, timeout: float = 2.0
) -> bool:
    """Return True if the endpoint accepts a connection within ``timeout``."""
    async with ConnectionHandle(session, url) as handle:
        try:
            async with asyncio.timeout(timeout):
                await handle.open()
        except ConnectivityError as exc:
            log.debug("Availability check failed for %s: %s", url, exc)
            return False
        except TimeoutError:
            log.debug("Availability check timed out after %.1fs for %s", timeout, url)
            return False
    return True
