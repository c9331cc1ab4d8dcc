"""Close handshake probe."""

import asyncio
from dataclasses import dataclass

from websockets.asyncio.client import connect
from websockets.exceptions import WebSocketException
from websockets.frames import CloseCode

from ws_conformance.connection import describe_error
from ws_conformance.errors import ConnectivityError, ProbeTimeoutError
from ws_conformance.probes.base import Probe

CLOSE_PROBE_PAYLOAD = "test close"
CLOSE_REASON = "Normal closure"
CLOSE_NOT_RECEIVED = "Close event not received"


@dataclass(frozen=True, kw_only=True)
class CloseHandshakeProbe(Probe):
    """Initiates a normal closure and reports the server's acknowledgment.

    Runs on the ``websockets`` client, which keeps the code and reason of the
    close frame the server sends back. The aiohttp client only keeps the code.
    """

    name = "Close Handshake"
    description = "close handshake"
    timeout_detail = CLOSE_NOT_RECEIVED

    close_delay: float = 0.1

    async def check(self) -> str:
        try:
            async with asyncio.timeout(self.timeout):
                async with connect(
                    self.url,
                    open_timeout=None,
                    ping_interval=None,
                    close_timeout=self.timeout,
                ) as ws:
                    await ws.send(CLOSE_PROBE_PAYLOAD)
                    await asyncio.sleep(self.close_delay)
                    await ws.close(code=CloseCode.NORMAL_CLOSURE, reason=CLOSE_REASON)
        except TimeoutError:
            raise
        except (OSError, WebSocketException) as exc:
            raise ConnectivityError(describe_error(exc)) from exc

        code = ws.close_code
        if code is None or code == CloseCode.ABNORMAL_CLOSURE:
            raise ProbeTimeoutError(CLOSE_NOT_RECEIVED)
        return f"Code: {int(code)}, Reason: {ws.close_reason}"
