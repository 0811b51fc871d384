"""fhtelemetry: Forza Horizon Telemetry Decoder

A Python library that decodes the fixed-size "Data Out" UDP telemetry packet
of the Forza Horizon racing games into typed records.

Key Features:
- Declarative schema of (offset, length, target type) field descriptors
- One generic decoder, no per-field parsing code
- Pydantic model of the canonical packet
- Encoder for building packet fixtures
- UDP listener and replay sources

Quick Start:
    >>> from fhtelemetry import FORZA_SCHEMA, decode, decode_packet
    >>>
    >>> record = decode(datagram, FORZA_SCHEMA)
    >>> record["current_engine_rpm"]
    >>>
    >>> packet = decode_packet(datagram)
    >>> packet.gear, packet.speed
"""

from __future__ import annotations

from .codec import FieldDescriptor, Schema, TargetType, TelemetryRecord, decode, encode
from .exceptions import (
    DecodeError,
    EncodeError,
    OutOfBounds,
    SchemaError,
    TelemetryError,
    UnsupportedFieldSpec,
)
from .models import FORZA_SCHEMA, PACKET_SIZE, ForzaDataPacket, decode_packet
from .utils import field_layout, required_size, unmapped_ranges

__version__ = "0.1.0"

__all__ = [
    # Core API
    "decode",
    "encode",
    "decode_packet",
    # Schema
    "Schema",
    "FieldDescriptor",
    "TargetType",
    "TelemetryRecord",
    "FORZA_SCHEMA",
    "PACKET_SIZE",
    "ForzaDataPacket",
    # Exceptions
    "TelemetryError",
    "SchemaError",
    "UnsupportedFieldSpec",
    "DecodeError",
    "OutOfBounds",
    "EncodeError",
    # Sizing
    "required_size",
    "field_layout",
    "unmapped_ranges",
    # Version
    "__version__",
]
