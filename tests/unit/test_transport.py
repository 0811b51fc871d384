"""Unit tests for packet sources."""

from __future__ import annotations

import socket
from pathlib import Path

import pytest

from fhtelemetry import decode_packet
from fhtelemetry.transport import (
    ListenerConfig,
    ReplayPacketSource,
    UdpPacketSource,
    load_recording,
    save_recording,
)


class TestListenerConfig:
    """Test listener configuration validation."""

    def test_defaults(self) -> None:
        """Test default values."""
        config = ListenerConfig()
        assert config.host == "0.0.0.0"
        assert config.port == 9999
        assert config.buffer_size == 1500
        assert config.timeout is None

    @pytest.mark.parametrize(
        "kwargs,message",
        [
            ({"port": -1}, "port"),
            ({"port": 70000}, "port"),
            ({"buffer_size": 0}, "buffer_size"),
            ({"timeout": 0}, "timeout"),
        ],
    )
    def test_invalid(self, kwargs: dict, message: str) -> None:
        """Test invalid parameters are rejected."""
        with pytest.raises(ValueError, match=message):
            ListenerConfig(**kwargs)


@pytest.fixture
def udp_source():
    """UDP source bound to a free loopback port."""
    source = UdpPacketSource(ListenerConfig(host="127.0.0.1", port=0, timeout=2.0))
    source.open()
    yield source
    source.close()


def send(address: tuple[str, int], payload: bytes) -> None:
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sender:
        sender.sendto(payload, address)


class TestUdpPacketSource:
    """Test receiving datagrams over loopback."""

    def test_receive_exact_datagram(self, udp_source: UdpPacketSource, racing_packet: bytes) -> None:
        """Test the returned bytes are exactly the datagram."""
        send(udp_source.address, racing_packet)
        received = udp_source.receive()

        assert received == racing_packet
        assert decode_packet(received).gear == 4

    def test_packets_are_independent_copies(self, udp_source: UdpPacketSource) -> None:
        """Test a later receive does not overwrite an earlier packet."""
        send(udp_source.address, b"\x01" * 324)
        first = udp_source.receive()
        send(udp_source.address, b"\x02" * 10)
        second = udp_source.receive()

        assert first == b"\x01" * 324
        assert second == b"\x02" * 10
        assert isinstance(first, bytes)

    def test_iteration(self, udp_source: UdpPacketSource) -> None:
        """Test iterating yields received packets."""
        send(udp_source.address, b"a")
        send(udp_source.address, b"b")
        iterator = iter(udp_source)
        assert [next(iterator), next(iterator)] == [b"a", b"b"]

    def test_timeout(self, udp_source: UdpPacketSource) -> None:
        """Test receive times out when configured."""
        udp_source._sock.settimeout(0.05)
        with pytest.raises(socket.timeout):
            udp_source.receive()

    def test_receive_before_open(self) -> None:
        """Test receive requires open()."""
        source = UdpPacketSource(ListenerConfig(host="127.0.0.1", port=0))
        with pytest.raises(RuntimeError, match="not open"):
            source.receive()
        with pytest.raises(RuntimeError, match="not open"):
            source.address

    def test_context_manager(self) -> None:
        """Test the socket is bound on enter and closed on exit."""
        source = UdpPacketSource(ListenerConfig(host="127.0.0.1", port=0))
        with source:
            host, port = source.address
            assert host == "127.0.0.1"
            assert port > 0
        with pytest.raises(RuntimeError):
            source.address
        source.close()  # second close is a no-op

    def test_bind_failure(self) -> None:
        """Test bind errors propagate."""
        with UdpPacketSource(ListenerConfig(host="127.0.0.1", port=0)) as taken:
            _, port = taken.address
            clash = UdpPacketSource(ListenerConfig(host="127.0.0.1", port=port))
            with pytest.raises(OSError):
                clash.open()


class TestReplayPacketSource:
    """Test replaying recorded packets."""

    def test_replay_in_order(self) -> None:
        """Test packets come back in order and iteration stops at the end."""
        with ReplayPacketSource([b"one", b"two", b"three"]) as source:
            assert list(source) == [b"one", b"two", b"three"]
            with pytest.raises(EOFError):
                source.receive()

    def test_receive_before_open(self) -> None:
        with pytest.raises(RuntimeError, match="not open"):
            ReplayPacketSource([b"x"]).receive()

    def test_reopen_restarts(self) -> None:
        """Test reopening replays from the start."""
        source = ReplayPacketSource([b"x", b"y"])
        with source:
            source.receive()
        with source:
            assert source.receive() == b"x"
        assert len(source) == 2


class TestRecordings:
    """Test the recording file format."""

    def test_save_and_load(self, tmp_path: Path, racing_packet: bytes) -> None:
        """Test packets survive a save/load cycle."""
        path = tmp_path / "session.bin"
        packets = [racing_packet, b"", b"\x00\x01"]

        assert save_recording(path, packets) == 3
        assert load_recording(path) == packets

        with ReplayPacketSource.from_file(path) as source:
            assert decode_packet(source.receive()).lap == 3

    def test_file_layout(self, tmp_path: Path) -> None:
        """Test the on-disk format."""
        path = tmp_path / "one.bin"
        save_recording(path, [b"ab"])
        assert path.read_bytes() == b"\x01\x00\x00\x00" + b"\x02\x00\x00\x00" + b"ab"

    @pytest.mark.parametrize(
        "content",
        [
            b"\x01\x00",
            b"\x01\x00\x00\x00",
            b"\x01\x00\x00\x00\x05\x00\x00\x00ab",
        ],
    )
    def test_truncated(self, tmp_path: Path, content: bytes) -> None:
        """Test truncated recordings are rejected."""
        path = tmp_path / "bad.bin"
        path.write_bytes(content)
        with pytest.raises(ValueError, match="truncated|needs"):
            load_recording(path)
