"""WebSocket connection handle built on the aiohttp client."""

import logging
from collections.abc import Awaitable, Callable
from enum import StrEnum
from types import TracebackType
from typing import Any, Self

import aiohttp
from aiohttp import WSCloseCode, WSMsgType

from ws_conformance.errors import ConnectivityError, PeerClosedError

log = logging.getLogger(__name__)

DATA_MESSAGE_TYPES = frozenset({WSMsgType.TEXT, WSMsgType.BINARY})
CONTROL_MESSAGE_TYPES = frozenset({WSMsgType.PING, WSMsgType.PONG})


class ConnectionState(StrEnum):
    """Lifecycle of a connection handle."""

    CONNECTING = "connecting"
    OPEN = "open"
    CLOSING = "closing"
    CLOSED = "closed"
    ERRORED = "errored"


def describe_error(exc: BaseException) -> str:
    """Return a readable message for a transport exception."""
    return str(exc) or type(exc).__name__


class ConnectionHandle:
    """One client connection to the server under test.

    The handle is an async context manager: leaving the ``async with`` block
    closes the connection on every path, including cancellation by a probe
    timeout. Only one task may receive from a handle at a time.
    """

    def __init__(
        self,
        session: aiohttp.ClientSession,
        url: str,
        *,
        autoping: bool = True,
        close_timeout: float = 2.0,
    ) -> None:
        self.session = session
        self.url = url
        self.autoping = autoping
        self.close_timeout = close_timeout
        self.state = ConnectionState.CONNECTING
        self._ws: aiohttp.ClientWebSocketResponse | None = None

    def __repr__(self) -> str:
        return f"<ConnectionHandle url={self.url!r} state={self.state}>"

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()

    @property
    def released(self) -> bool:
        """True once the handle no longer holds a live transport."""
        return self.state in (ConnectionState.CLOSED, ConnectionState.ERRORED)

    async def open(self) -> None:
        """Perform the opening handshake.

        Raises:
            ConnectivityError: If the connection cannot be established

        """
        if self.state is not ConnectionState.CONNECTING:
            raise RuntimeError(f"Cannot open a connection in state {self.state}")

        try:
            self._ws = await self.session.ws_connect(
                self.url,
                autoping=self.autoping,
                timeout=aiohttp.ClientWSTimeout(ws_close=self.close_timeout),
            )
        except (aiohttp.ClientError, OSError) as exc:
            self.state = ConnectionState.ERRORED
            raise ConnectivityError(describe_error(exc)) from exc

        self.state = ConnectionState.OPEN
        log.debug("Connection open: %s", self.url)

    async def send_text(self, data: str) -> None:
        await self._send(self._require_ws().send_str, data)

    async def send_bytes(self, data: bytes) -> None:
        await self._send(self._require_ws().send_bytes, data)

    async def ping(self, payload: bytes = b"") -> None:
        await self._send(self._require_ws().ping, payload)

    async def pong(self, payload: bytes = b"") -> None:
        await self._send(self._require_ws().pong, payload)

    async def receive(self) -> aiohttp.WSMessage:
        """Wait for the next data or control message.

        Ping and pong messages are only returned when automatic pong replies
        are disabled for this handle.

        Raises:
            PeerClosedError: If the server closes the connection
            ConnectivityError: If the transport fails

        """
        ws = self._require_ws()
        msg = await ws.receive()

        if msg.type in DATA_MESSAGE_TYPES or msg.type in CONTROL_MESSAGE_TYPES:
            return msg

        if msg.type is WSMsgType.ERROR:
            self.state = ConnectionState.ERRORED
            raise ConnectivityError(describe_error(msg.data))

        self.state = ConnectionState.CLOSED
        if msg.type is WSMsgType.CLOSE:
            raise PeerClosedError(msg.data, msg.extra or "")
        raise PeerClosedError(ws.close_code)

    async def close(
        self, code: int = WSCloseCode.OK, reason: str = ""
    ) -> int | None:
        """Run the close handshake.

        Closing an already released handle does nothing.

        Returns:
            The close code acknowledged by the server, or None if no
            acknowledgment arrived

        """
        if self._ws is None:
            if self.state is not ConnectionState.ERRORED:
                self.state = ConnectionState.CLOSED
            return None

        if not self._ws.closed:
            self.state = ConnectionState.CLOSING
            try:
                await self._ws.close(code=code, message=reason.encode())
            finally:
                self.state = ConnectionState.CLOSED
                log.debug("Connection closed: %s", self.url)
        elif self.state is not ConnectionState.ERRORED:
            self.state = ConnectionState.CLOSED

        close_code = self._ws.close_code
        if close_code is None or close_code == WSCloseCode.ABNORMAL_CLOSURE:
            return None
        return close_code

    def _require_ws(self) -> aiohttp.ClientWebSocketResponse:
        if self._ws is None or self.state is not ConnectionState.OPEN:
            raise ConnectivityError(f"Connection is not open (state={self.state})")
        return self._ws

    async def _send(
        self, send: Callable[[Any], Awaitable[None]], payload: Any
    ) -> None:
        try:
            await send(payload)
        except (aiohttp.ClientError, OSError) as exc:
            self.state = ConnectionState.ERRORED
            raise ConnectivityError(describe_error(exc)) from exc
