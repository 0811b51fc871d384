"""Schema-driven packet encoder.

This module provides the encode() function, the inverse of decode(). It is
used to build packet fixtures: anything decode() produces can be encoded back
to bytes that decode to the same record.
"""

from __future__ import annotations

import math
from typing import Any, Mapping, Optional

from ..exceptions import EncodeError
from .bytepack import BytePacker, float32_from_bits, float32_to_bits
from .schema import FieldDescriptor, Schema, TargetType

_INDEFINITE = 1 << 63
_UINT64_RANGE = 1 << 64


def encode(
    record: Mapping[str, Any], schema: Schema, *, base: Optional[bytes] = None
) -> bytes:
    """Encode a record into a packet of ``schema.packet_size`` bytes.

    Bytes not covered by any field are zero, or copied from ``base``.

    Args:
        record: Mapping of field name to value; must contain every schema field
        schema: Field descriptors to encode
        base: Optional packet to start from (must be ``packet_size`` bytes)

    Returns:
        Encoded packet

    Raises:
        EncodeError: If a field is missing, unknown, of the wrong type, or out of range

    Examples:
        ```python
        from fhtelemetry import FORZA_SCHEMA, decode, encode

        record = decode(datagram, FORZA_SCHEMA)
        record["gear"] = 3
        patched = encode(record, FORZA_SCHEMA)
        ```
    """
    unknown = [name for name in record if name not in schema]
    if unknown:
        raise EncodeError(f"Unknown fields for schema {schema.name}: {', '.join(map(str, unknown))}")

    try:
        packer = BytePacker(schema.packet_size, base)
    except ValueError as e:
        raise EncodeError(f"Invalid base packet: {e}") from e

    for field in schema:
        if field.name not in record:
            raise EncodeError(f"Field {field.name} is missing from record")
        _encode_field(packer, field, record[field.name])

    return packer.to_bytes()


def _encode_field(packer: BytePacker, field: FieldDescriptor, value: Any) -> None:
    """Encode a single field value.

    Raises:
        EncodeError: If value is invalid for the field
    """
    target_type = field.target_type

    # One- and two-byte fields carry plain unsigned integers
    if field.length in (1, 2):
        if isinstance(value, bool) or not isinstance(value, int):
            raise EncodeError(f"Field {field.name}: expected int, got {type(value).__name__}")
        try:
            packer.write_uint(field.offset, value, field.length)
        except ValueError as e:
            raise EncodeError(f"Field {field.name}: {e}") from e
        return

    if target_type is TargetType.BOOL:
        if not isinstance(value, bool):
            raise EncodeError(f"Field {field.name}: expected bool, got {type(value).__name__}")
        packer.write_float32(field.offset, 1.0 if value else 0.0)
        return

    if target_type is TargetType.FLOAT32:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise EncodeError(f"Field {field.name}: expected float, got {type(value).__name__}")
        try:
            packer.write_float32(field.offset, value)
        except OverflowError as e:
            raise EncodeError(f"Field {field.name}: {value} exceeds single precision range") from e
        return

    # UINT / INT
    if isinstance(value, bool) or not isinstance(value, int):
        raise EncodeError(f"Field {field.name}: expected int, got {type(value).__name__}")

    if target_type is TargetType.UINT and value < 0:
        raise EncodeError(f"Field {field.name}: unsigned value {value} is negative")

    # Four-byte integers travel as single-precision floats. Unsigned values in
    # the upper half of the 64-bit range may come from wrapped negative floats.
    candidates = [value]
    if target_type is TargetType.UINT and value >= _INDEFINITE:
        candidates.append(value - _UINT64_RANGE)

    for candidate in candidates:
        bits = _exact_float32_bits(candidate)
        if bits is not None:
            packer.write_uint(field.offset, bits, 4)
            return

    raise EncodeError(
        f"Field {field.name}: {value} is not exactly representable as a single precision float"
    )


def _exact_float32_bits(value: int) -> Optional[int]:
    """Return the single-precision bit pattern of an integer, or None if it would round."""
    try:
        bits = float32_to_bits(float(value))
    except OverflowError:
        return None
    decoded = float32_from_bits(bits)
    if not math.isfinite(decoded) or int(decoded) != value:
        return None
    return bits
