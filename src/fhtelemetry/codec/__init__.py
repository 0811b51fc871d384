"""Schema-driven binary codec for telemetry packets.

This module provides the field descriptor schema and the decode/encode
functions built on it.
"""

from __future__ import annotations

from .decoder import TelemetryRecord, decode
from .encoder import encode
from .schema import FieldDescriptor, Schema, TargetType

__all__ = [
    "decode",
    "encode",
    "TelemetryRecord",
    "Schema",
    "FieldDescriptor",
    "TargetType",
]
