"""Configuration for a harness run."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_URL = "ws://127.0.0.1:8080"


class HarnessConfig(BaseModel):
    """Target endpoint and timing bounds for one run."""

    model_config = ConfigDict(frozen=True)

    url: str = Field(default=DEFAULT_URL, description="WebSocket endpoint under test")
    timeout: float = Field(
        default=5.0, gt=0, description="Default bound for a single probe (seconds)"
    )
    precheck_timeout: float = Field(
        default=2.0, gt=0, description="Bound for the availability check"
    )
    settle_delay: float = Field(
        default=0.5, ge=0, description="Pause between two consecutive probes"
    )
    fragment_grace: float = Field(
        default=2.0, ge=0, description="Extra receive window for large messages"
    )
    pong_grace: float = Field(
        default=1.0, ge=0, description="Wait for a pong after an echoed keepalive"
    )
    close_delay: float = Field(
        default=0.1, ge=0, description="Delay before the close handshake is initiated"
    )
    close_timeout: float = Field(
        default=2.0, gt=0, description="Bound for the close handshake during cleanup"
    )
    connection_count: int = Field(
        default=5, gt=0, description="Connections opened by the concurrency probe"
    )

    @field_validator("url")
    @classmethod
    def _require_websocket_scheme(cls, value: str) -> str:
        if not value.startswith(("ws://", "wss://")):
            raise ValueError(f"URL must use the ws:// or wss:// scheme, got {value!r}")
        return value
