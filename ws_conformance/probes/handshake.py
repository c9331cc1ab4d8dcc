"""Opening handshake probe."""

import asyncio
from dataclasses import dataclass

from ws_conformance.probes.base import Probe


@dataclass(frozen=True, kw_only=True)
class HandshakeProbe(Probe):
    """Passes when the connection reaches the open state in time."""

    name = "Handshake"
    description = "WebSocket handshake"

    async def check(self) -> str:
        async with self.connection() as handle:
            async with asyncio.timeout(self.timeout):
                await handle.open()
        return ""
