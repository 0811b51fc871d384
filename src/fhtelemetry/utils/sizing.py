"""Packet size and layout utilities.

This module provides functions to inspect a schema's byte layout without
decoding anything.
"""

from __future__ import annotations

from ..codec.schema import Schema


def required_size(schema: Schema) -> int:
    """Return the smallest buffer length that holds every field of a schema.

    Example:
        >>> required_size(FORZA_SCHEMA)
        323
    """
    return schema.required_size


def field_layout(schema: Schema) -> dict[str, tuple[int, int]]:
    """Get the (offset, length) of each field in a schema.

    Returns:
        Dictionary mapping field names to (offset, length), in schema order

    Example:
        >>> field_layout(FORZA_SCHEMA)["lap"]
        (312, 2)
    """
    return {field.name: (field.offset, field.length) for field in schema}


def unmapped_ranges(schema: Schema) -> list[tuple[int, int]]:
    """Find the byte ranges of a packet that no field covers.

    Returns:
        Sorted list of half-open ``(start, end)`` ranges within ``packet_size``

    Example:
        >>> unmapped_ranges(FORZA_SCHEMA)
        [(213, 216), (217, 220), (221, 224), (225, 228), (229, 244), (323, 324)]
    """
    covered = bytearray(schema.packet_size)
    for field in schema:
        covered[field.offset : field.end] = b"\x01" * field.length

    ranges: list[tuple[int, int]] = []
    start = None
    for index, flag in enumerate(covered):
        if not flag and start is None:
            start = index
        elif flag and start is not None:
            ranges.append((start, index))
            start = None
    if start is not None:
        ranges.append((start, schema.packet_size))

    return ranges
