"""Schema layout CLI command."""

from __future__ import annotations

from ..codec.schema import Schema
from ..utils.sizing import unmapped_ranges


def describe_schema(schema: Schema) -> None:
    """Print a field-by-field breakdown of a schema's byte layout.

    Args:
        schema: Schema to describe
    """
    print("|" * 7, "fhtelemetry: Forza Horizon Telemetry Decoder", "|" * 7)
    print(f"Schema {schema.name}: {len(schema)} fields, packet size {schema.packet_size} bytes")
    print(f"Minimum decodable buffer: {schema.required_size} bytes")
    print()

    print(f"{'-' * 28} Fields {'-' * 28}")
    for i, field in enumerate(schema, 1):
        field_desc = f"{i}. {field.name}"
        location = f"@{field.offset} [{field.length}B] {field.target_type}"
        dots = "." * max(1, 62 - len(field_desc) - len(location))
        print(f"        {field_desc}{dots}{location}")

    print()

    gaps = unmapped_ranges(schema)
    print(f"{'-' * 25} Unmapped bytes {'-' * 25}")
    if not gaps:
        print("        (none)")
    for start, end in gaps:
        print(f"        {start}-{end - 1} ({end - start} bytes)")

    print()
