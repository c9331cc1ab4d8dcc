"""Echo probes for text and binary messages."""

import asyncio
from dataclasses import dataclass

import aiohttp
from aiohttp import WSMsgType

from ws_conformance.errors import ProtocolMismatchError
from ws_conformance.probes.base import Probe

TEXT_PAYLOAD = "Hello, WebSocket!"
BINARY_PAYLOAD = bytes([0x01, 0x02, 0x03, 0x04, 0x05])


@dataclass(frozen=True, kw_only=True)
class TextEchoProbe(Probe):
    """Sends one text message and expects the same text back."""

    name = "Text Message"
    description = "text message send/receive"

    async def check(self) -> str:
        async with self.connection() as handle:
            async with asyncio.timeout(self.timeout):
                await handle.open()
                await handle.send_text(TEXT_PAYLOAD)
                msg = await handle.receive()

        received = render_as_text(msg)
        if msg.type is not WSMsgType.TEXT or received != TEXT_PAYLOAD:
            raise ProtocolMismatchError(
                f'Expected "{TEXT_PAYLOAD}", got "{received}"'
            )
        return ""


@dataclass(frozen=True, kw_only=True)
class BinaryEchoProbe(Probe):
    """Sends one binary message and expects identical bytes back."""

    name = "Binary Message"
    description = "binary message send/receive"

    async def check(self) -> str:
        async with self.connection() as handle:
            async with asyncio.timeout(self.timeout):
                await handle.open()
                await handle.send_bytes(BINARY_PAYLOAD)
                msg = await handle.receive()

        received = render_as_bytes(msg)
        if msg.type is not WSMsgType.BINARY or received != BINARY_PAYLOAD:
            raise ProtocolMismatchError(
                f"Expected {BINARY_PAYLOAD.hex()}, got {received.hex()}"
            )
        return ""


def render_as_text(msg: aiohttp.WSMessage) -> str:
    """Return the payload of a data message as text."""
    if msg.type is WSMsgType.BINARY:
        return bytes(msg.data).decode("utf-8", errors="replace")
    return str(msg.data)


def render_as_bytes(msg: aiohttp.WSMessage) -> bytes:
    """Return the payload of a data message as bytes."""
    if msg.type is WSMsgType.TEXT:
        return str(msg.data).encode("utf-8")
    return bytes(msg.data)
