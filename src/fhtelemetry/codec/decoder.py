"""Schema-driven packet decoder.

This module provides the decode() function that turns a raw telemetry datagram
into a record, guided only by the field descriptors of a Schema.
"""

from __future__ import annotations

import math
from typing import Dict, Union

from ..exceptions import OutOfBounds, UnsupportedFieldSpec
from .bytepack import ByteUnpacker
from .schema import FieldDescriptor, Schema, TargetType

TelemetryRecord = Dict[str, Union[int, float, bool]]

# Result of converting a NaN, an infinity or an out-of-range float to a
# 64-bit integer on x86 (the "integer indefinite" value).
_INDEFINITE = 1 << 63
_UINT64_RANGE = 1 << 64


def decode(buffer: bytes | bytearray | memoryview, schema: Schema) -> TelemetryRecord:
    """Decode a raw packet into a record.

    Fields are decoded in schema order. The buffer may be longer than the
    schema needs (datagrams are usually received into a larger buffer), but
    every field must fit.

    Args:
        buffer: Raw packet bytes; never modified
        schema: Field descriptors to decode

    Returns:
        Dictionary mapping field names to decoded values, in schema order

    Raises:
        OutOfBounds: If the buffer is too short for a field
        UnsupportedFieldSpec: If a field has an unknown length/type combination

    Examples:
        ```python
        from fhtelemetry import FORZA_SCHEMA, decode

        record = decode(datagram, FORZA_SCHEMA)
        print(record["current_engine_rpm"], record["gear"])
        ```
    """
    unpacker = ByteUnpacker(buffer)
    buffer_length = len(unpacker)

    record: TelemetryRecord = {}
    for field in schema:
        if field.end > buffer_length:
            raise OutOfBounds(field.name, field.offset, field.length, buffer_length)
        record[field.name] = _decode_field(unpacker, field)

    return record


def _decode_field(unpacker: ByteUnpacker, field: FieldDescriptor) -> Union[int, float, bool]:
    """Decode a single field value.

    Raises:
        UnsupportedFieldSpec: If (length, target_type) matches no case
    """
    length, target_type = field.length, field.target_type

    # Single byte: unsigned magnitude, no sign extension even for INT
    if length == 1 and target_type in (TargetType.UINT, TargetType.INT):
        return unpacker.read_uint(field.offset, 1)

    # Two bytes: always an unsigned 16-bit integer, whatever the target type
    if length == 2:
        return unpacker.read_uint(field.offset, 2)

    if length == 4:
        value = unpacker.read_float32(field.offset)

        if target_type is TargetType.FLOAT32:
            return value
        if target_type is TargetType.UINT:
            return truncate_unsigned(value)
        if target_type is TargetType.INT:
            return truncate_signed(value)
        if target_type is TargetType.BOOL:
            return truncate_signed(value) != 0

    raise UnsupportedFieldSpec(field.name, length, target_type)


def truncate_signed(value: float) -> int:
    """Truncate a float toward zero into the signed 64-bit range.

    NaN, infinities and values outside the range give ``-2**63``.

    Example:
        >>> truncate_signed(-3.9)
        -3
    """
    if not math.isfinite(value):
        return -_INDEFINITE
    truncated = math.trunc(value)
    if not -_INDEFINITE <= truncated < _INDEFINITE:
        return -_INDEFINITE
    return truncated


def truncate_unsigned(value: float) -> int:
    """Truncate a float toward zero into the unsigned 64-bit range.

    Negative values wrap around (``-1.0`` gives ``2**64 - 1``). NaN,
    infinities and values outside ``[-2**63, 2**64)`` give ``2**63``.

    Example:
        >>> truncate_unsigned(7.5)
        7
    """
    if not math.isfinite(value):
        return _INDEFINITE
    truncated = math.trunc(value)
    if not -_INDEFINITE <= truncated < _UINT64_RANGE:
        return _INDEFINITE
    return truncated % _UINT64_RANGE
