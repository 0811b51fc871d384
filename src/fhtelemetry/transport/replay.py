"""Replay of recorded telemetry packets.

Recordings use a small length-prefixed file format::

    <I  packet count
    repeated: <I packet length, then that many raw bytes
"""

from __future__ import annotations

import logging
import struct
from pathlib import Path
from typing import Iterable, Optional, Union

from .source import PacketSource

logger = logging.getLogger(__name__)

_COUNT = struct.Struct("<I")


def save_recording(path: Union[str, Path], packets: Iterable[bytes]) -> int:
    """Write packets to a recording file.

    Args:
        path: Destination file
        packets: Raw packets in arrival order

    Returns:
        Number of packets written
    """
    packet_list = [bytes(packet) for packet in packets]
    with open(path, "wb") as f:
        f.write(_COUNT.pack(len(packet_list)))
        for packet in packet_list:
            f.write(_COUNT.pack(len(packet)))
            f.write(packet)

    logger.info("Saved %d packets to %s", len(packet_list), path)
    return len(packet_list)


def load_recording(path: Union[str, Path]) -> list[bytes]:
    """Read all packets from a recording file.

    Raises:
        ValueError: If the file is truncated or malformed
    """
    data = Path(path).read_bytes()
    if len(data) < _COUNT.size:
        raise ValueError(f"{path}: recording header is truncated")

    (count,) = _COUNT.unpack_from(data, 0)
    position = _COUNT.size
    packets: list[bytes] = []
    for index in range(count):
        if position + _COUNT.size > len(data):
            raise ValueError(f"{path}: length of packet {index} is truncated")
        (length,) = _COUNT.unpack_from(data, position)
        position += _COUNT.size
        if position + length > len(data):
            raise ValueError(
                f"{path}: packet {index} needs {length} bytes, only {len(data) - position} left"
            )
        packets.append(data[position : position + length])
        position += length

    logger.debug("Loaded %d packets from %s", count, path)
    return packets


class ReplayPacketSource(PacketSource):
    """Replays recorded packets in order.

    Useful for testing the receive/decode pipeline without the game running.

    Examples:
        ```python
        from fhtelemetry.transport import ReplayPacketSource, load_recording

        with ReplayPacketSource(load_recording("session.bin")) as source:
            for datagram in source:
                ...
        ```
    """

    def __init__(self, packets: Iterable[bytes]) -> None:
        """Initialize the source.

        Args:
            packets: Raw packets to replay; copied on construction
        """
        self._packets = [bytes(packet) for packet in packets]
        self._position: Optional[int] = None

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> ReplayPacketSource:
        """Create a source from a recording file written by save_recording()."""
        return cls(load_recording(path))

    def __len__(self) -> int:
        return len(self._packets)

    def open(self) -> None:
        self._position = 0

    def receive(self) -> bytes:
        """Return the next recorded packet.

        Raises:
            RuntimeError: If the source is not open
            EOFError: If every packet has been replayed
        """
        if self._position is None:
            raise RuntimeError("ReplayPacketSource not open. Call open() before receive().")
        if self._position >= len(self._packets):
            raise EOFError("No more recorded packets")

        packet = self._packets[self._position]
        self._position += 1
        return packet

    def close(self) -> None:
        self._position = None
