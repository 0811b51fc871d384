"""Canonical Forza Horizon packet layout and typed packet model."""

from __future__ import annotations

from .packet import FORZA_SCHEMA, PACKET_SIZE, ForzaDataPacket, decode_packet

__all__ = [
    "FORZA_SCHEMA",
    "PACKET_SIZE",
    "ForzaDataPacket",
    "decode_packet",
]
