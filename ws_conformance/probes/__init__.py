"""Conformance probes in execution order."""

from collections.abc import Sequence
from typing import Any

import aiohttp

from ws_conformance.models.config import HarnessConfig
from ws_conformance.probes.base import Probe
from ws_conformance.probes.close_handshake import CloseHandshakeProbe
from ws_conformance.probes.concurrency import ConcurrentConnectionsProbe
from ws_conformance.probes.echo import BinaryEchoProbe, TextEchoProbe
from ws_conformance.probes.fragmentation import FragmentationProbe
from ws_conformance.probes.handshake import HandshakeProbe
from ws_conformance.probes.keepalive import KeepaliveProbe

__all__ = [
    "BinaryEchoProbe",
    "CloseHandshakeProbe",
    "ConcurrentConnectionsProbe",
    "FragmentationProbe",
    "HandshakeProbe",
    "KeepaliveProbe",
    "Probe",
    "TextEchoProbe",
    "build_probes",
]


def build_probes(
    config: HarnessConfig, session: aiohttp.ClientSession
) -> Sequence[Probe]:
    """Create the probe battery for a run, in the order it must execute."""
    common: dict[str, Any] = {
        "session": session,
        "url": config.url,
        "timeout": config.timeout,
        "close_timeout": config.close_timeout,
    }
    return (
        HandshakeProbe(**common),
        TextEchoProbe(**common),
        BinaryEchoProbe(**common),
        KeepaliveProbe(**common, pong_grace=config.pong_grace),
        FragmentationProbe(**common, fragment_grace=config.fragment_grace),
        CloseHandshakeProbe(**common, close_delay=config.close_delay),
        ConcurrentConnectionsProbe(
            **common, connection_count=config.connection_count
        ),
    )
