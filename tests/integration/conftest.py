"""Fixtures for integration tests against local aiohttp WebSocket servers."""

from collections.abc import AsyncGenerator, Callable
from typing import Any

import aiohttp
import pytest
from aiohttp.test_utils import TestServer, unused_port

from ws_conformance.models.config import HarnessConfig
from ws_conformance.testing.servers import create_app

PROBE_TIMEOUT = 0.5


@pytest.fixture
async def ws_server() -> AsyncGenerator[TestServer, None]:
    """Start a server exposing every test behavior on its own path."""
    server = TestServer(create_app())
    await server.start_server()
    yield server
    await server.close()


@pytest.fixture
def ws_url(ws_server: TestServer) -> Callable[[str], str]:
    """Return a function building URLs on the running test server."""

    def _url(path: str) -> str:
        return f"ws://{ws_server.host}:{ws_server.port}{path}"

    return _url


@pytest.fixture
def unreachable_url() -> str:
    """URL of a local port with nothing listening."""
    return f"ws://127.0.0.1:{unused_port()}/"


@pytest.fixture
async def session() -> AsyncGenerator[aiohttp.ClientSession, None]:
    """Client session shared by the connections of one test."""
    async with aiohttp.ClientSession() as client_session:
        yield client_session


@pytest.fixture
def make_config() -> Callable[..., HarnessConfig]:
    """Return a function building configurations with short timings."""

    def _config(url: str, **overrides: Any) -> HarnessConfig:
        timings = {
            "timeout": PROBE_TIMEOUT,
            "precheck_timeout": PROBE_TIMEOUT,
            "settle_delay": 0.0,
            "fragment_grace": 0.1,
            "pong_grace": 0.1,
            "close_delay": 0.05,
            "close_timeout": PROBE_TIMEOUT,
        }
        timings.update(overrides)
        return HarnessConfig(url=url, **timings)

    return _config
