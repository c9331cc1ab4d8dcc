"""Large message (fragmentation) probe."""

import asyncio
import logging
from dataclasses import dataclass

from ws_conformance.errors import PeerClosedError, ProtocolMismatchError
from ws_conformance.probes.base import Probe
from ws_conformance.probes.echo import render_as_text

log = logging.getLogger(__name__)

FRAGMENT_PAYLOAD = "A" * 10000


@dataclass(frozen=True, kw_only=True)
class FragmentationProbe(Probe):
    """Sends one large message and reassembles whatever comes back.

    The server may echo the message whole or split it into several
    messages. Everything received during the window is concatenated in
    arrival order and compared with the original payload.
    """

    name = "Fragmented Message"
    description = "fragmented messages"

    fragment_grace: float = 2.0

    @property
    def window(self) -> float:
        return self.timeout + self.fragment_grace

    async def check(self) -> str:
        received: list[str] = []

        async with self.connection() as handle:
            try:
                async with asyncio.timeout(self.window):
                    await handle.open()
                    await handle.send_text(FRAGMENT_PAYLOAD)
                    while True:
                        received.append(render_as_text(await handle.receive()))
            except TimeoutError:
                log.debug("Receive window closed after %d message(s)", len(received))
            except PeerClosedError as exc:
                log.debug("Server closed after %d message(s): %s", len(received), exc)

        reassembled = "".join(received)
        if reassembled != FRAGMENT_PAYLOAD:
            raise ProtocolMismatchError(
                f"Expected {len(FRAGMENT_PAYLOAD)} chars, got {len(reassembled)}"
            )
        return f"{len(reassembled)} chars in {len(received)} message(s)"
