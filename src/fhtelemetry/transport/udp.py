"""UDP packet source for live telemetry."""

from __future__ import annotations

import logging
import socket
from typing import Optional

from .config import ListenerConfig
from .source import PacketSource

logger = logging.getLogger(__name__)


class UdpPacketSource(PacketSource):
    """Receives telemetry datagrams on a bound UDP socket.

    The socket is bound once in open() and reused for every receive. Each
    datagram is returned as a new ``bytes`` object holding exactly the bytes
    received, so decoding never races with the next receive.

    Attributes:
        config: Listener configuration
    """

    def __init__(self, config: Optional[ListenerConfig] = None) -> None:
        """Initialize the source.

        Args:
            config: Listener configuration. If None, uses default config.
        """
        self.config = config if config is not None else ListenerConfig()
        self._sock: Optional[socket.socket] = None
        self._buffer = bytearray(self.config.buffer_size)

    @property
    def address(self) -> tuple[str, int]:
        """Address the socket is bound to (resolves port 0 after open()).

        Raises:
            RuntimeError: If the source is not open
        """
        if self._sock is None:
            raise RuntimeError("UdpPacketSource not open. Call open() first.")
        host, port = self._sock.getsockname()[:2]
        return host, port

    def open(self) -> None:
        """Bind the UDP socket.

        Raises:
            OSError: If the address cannot be bound
        """
        if self._sock is not None:
            logger.debug("UDP source already open on %s:%d", *self.address)
            return

        sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        try:
            sock.bind((self.config.host, self.config.port))
        except OSError:
            sock.close()
            raise
        sock.settimeout(self.config.timeout)
        self._sock = sock
        logger.info("Listening for telemetry on %s:%d", *self.address)

    def receive(self) -> bytes:
        """Block until a datagram arrives and return a copy of it.

        Raises:
            RuntimeError: If the source is not open
            socket.timeout: If ``config.timeout`` elapses without a packet
        """
        if self._sock is None:
            raise RuntimeError("UdpPacketSource not open. Call open() before receive().")

        nbytes, addr = self._sock.recvfrom_into(self._buffer)
        logger.debug("Received %d bytes from %s:%d", nbytes, addr[0], addr[1])
        return bytes(self._buffer[:nbytes])

    def close(self) -> None:
        if self._sock is None:
            return
        self._sock.close()
        self._sock = None
        logger.info("Telemetry listener closed")
