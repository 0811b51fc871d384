"""Abstract interface for telemetry packet sources.

A packet source yields raw datagrams, one per logical packet. Delivery is
unreliable and unordered; every packet is decoded independently.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from types import TracebackType
from typing import Iterator, Optional, Type


class PacketSource(ABC):
    """Abstract source of raw telemetry packets.

    Every packet is returned as a fresh ``bytes`` object that the caller owns
    exclusively; a source never hands out a buffer it will write to again.

    Implementations:

    - **UdpPacketSource**: datagrams from the game over UDP
    - **ReplayPacketSource**: recorded packets from memory or a file

    Examples:
        ```python
        from fhtelemetry import decode_packet
        from fhtelemetry.transport import ListenerConfig, UdpPacketSource

        with UdpPacketSource(ListenerConfig(port=5300)) as source:
            for datagram in source:
                print(decode_packet(datagram).current_engine_rpm)
        ```
    """

    @abstractmethod
    def open(self) -> None:
        """Acquire the underlying resource (socket, file, ...)."""
        pass

    @abstractmethod
    def receive(self) -> bytes:
        """Return the next packet.

        Raises:
            RuntimeError: If the source is not open
            EOFError: If a finite source is exhausted
        """
        pass

    @abstractmethod
    def close(self) -> None:
        """Release the underlying resource. Safe to call more than once."""
        pass

    def __iter__(self) -> Iterator[bytes]:
        while True:
            try:
                yield self.receive()
            except EOFError:
                return

    def __enter__(self) -> PacketSource:
        self.open()
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        self.close()
