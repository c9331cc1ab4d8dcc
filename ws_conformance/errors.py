"""Errors raised while probing a WebSocket server."""


class ProbeError(Exception):
    """Base for failures that a probe turns into a failing result."""


class ConnectivityError(ProbeError):
    """Raised when a connection cannot be established or drops mid-probe."""


class PeerClosedError(ConnectivityError):
    """Raised when the server closes the connection while a probe expects data."""

    def __init__(self, code: int | None, reason: str = "") -> None:
        self.code = code
        self.reason = reason
        super().__init__(
            f"Connection closed by server (code={code}, reason={reason!r})"
        )


class ProtocolMismatchError(ProbeError):
    """Raised when a received payload differs from the expected one."""


class ProbeTimeoutError(ProbeError, TimeoutError):
    """Raised when a probe times out and has a more specific detail to report."""


class FatalUnavailableError(Exception):
    """Raised when the target endpoint cannot be reached before any probe runs."""

    def __init__(self, url: str) -> None:
        self.url = url
        super().__init__(f"Cannot connect to {url}")
