"""Configuration for the UDP telemetry listener."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass
class ListenerConfig:
    """Configuration for receiving telemetry datagrams.

    Attributes:
        host: Address to bind to (default "0.0.0.0", all interfaces).
            Use "127.0.0.1" when the game runs on the same machine.

        port: UDP port the game sends "Data Out" packets to (default 9999).
            Must match the port set in the game's HUD/gameplay options.
            Port 0 asks the OS for a free port (useful in tests).

        buffer_size: Receive buffer size in bytes (default 1500, one Ethernet
            MTU). Datagrams larger than this are truncated by the OS.

        timeout: Seconds to wait for a packet before ``socket.timeout`` is
            raised (default None, block forever).

    Examples:
        ```python
        from fhtelemetry.transport import ListenerConfig, UdpPacketSource

        config = ListenerConfig(host="127.0.0.1", port=5300, timeout=2.0)
        with UdpPacketSource(config) as source:
            datagram = source.receive()
        ```
    """

    host: str = "0.0.0.0"
    port: int = 9999
    buffer_size: int = 1500
    timeout: Optional[float] = None

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if not 0 <= self.port <= 65535:
            raise ValueError(f"port must be 0-65535, got {self.port}")

        if self.buffer_size < 1:
            raise ValueError(f"buffer_size must be >= 1, got {self.buffer_size}")

        if self.timeout is not None and self.timeout <= 0:
            raise ValueError(f"timeout must be > 0, got {self.timeout}")
