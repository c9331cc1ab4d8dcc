"""Concurrent connections probe."""

import asyncio
import logging
from dataclasses import dataclass

from ws_conformance.connection import ConnectionHandle
from ws_conformance.errors import ConnectivityError, ProbeTimeoutError
from ws_conformance.probes.base import Probe

log = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class ConcurrentConnectionsProbe(Probe):
    """Opens several connections at once and keeps them live together.

    This is the only probe with more than one connection open at a time.
    The first connection failure cancels the remaining attempts, and every
    handle is closed before the probe returns.
    """

    name = "Multiple Connections"
    description = "multiple concurrent connections"

    connection_count: int = 5

    @property
    def window(self) -> float:
        return self.timeout * 2

    async def check(self) -> str:
        handles = [self.connection() for _ in range(self.connection_count)]
        opened = 0

        async def connect(index: int, handle: ConnectionHandle) -> None:
            nonlocal opened
            try:
                await handle.open()
                await handle.send_text(f"Message from connection {index}")
            except ConnectivityError as exc:
                raise ConnectivityError(f"Connection {index} failed: {exc}") from exc
            opened += 1
            log.debug("Connection %d open (%d/%d)", index, opened, len(handles))

        try:
            async with asyncio.timeout(self.window):
                async with asyncio.TaskGroup() as group:
                    for index, handle in enumerate(handles):
                        group.create_task(connect(index, handle))
        except TimeoutError:
            if opened < len(handles):
                raise ProbeTimeoutError(
                    f"{opened}/{len(handles)} connections succeeded"
                ) from None
        except ExceptionGroup as group_error:
            raise group_error.exceptions[0] from None
        finally:
            await asyncio.gather(*(handle.close() for handle in handles))

        return f"{opened} connections"
