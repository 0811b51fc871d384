#!/usr/bin/env python3
"""Basic usage example for fhtelemetry.

This example demonstrates:
1. Building a packet fixture with encode()
2. Decoding it to a plain record with decode()
3. Decoding it to a typed ForzaDataPacket
4. Handling a truncated packet
"""

from __future__ import annotations

from fhtelemetry import (
    FORZA_SCHEMA,
    OutOfBounds,
    TargetType,
    decode,
    decode_packet,
    encode,
    unmapped_ranges,
)


def sample_record() -> dict:
    """A record of a car accelerating out of a corner."""
    record = {}
    for field in FORZA_SCHEMA:
        if field.target_type is TargetType.BOOL:
            record[field.name] = False
        elif field.target_type is TargetType.FLOAT32:
            record[field.name] = 0.0
        else:
            record[field.name] = 0
    record.update(
        is_race_on=True,
        engine_max_rpm=7500.0,
        current_engine_rpm=5250.0,
        speed=38.5,
        lap=2,
        gear=3,
        accelerator=255,
    )
    return record


def main() -> None:
    """Run the basic usage example."""
    print("=" * 60)
    print("fhtelemetry Basic Usage Example")
    print("=" * 60)
    print()

    print("1. Building a packet...")
    datagram = encode(sample_record(), FORZA_SCHEMA)
    print(f"   Packet size: {len(datagram)} bytes")
    print(f"   Unmapped byte ranges: {unmapped_ranges(FORZA_SCHEMA)}")
    print()

    print("2. Decoding to a record...")
    record = decode(datagram, FORZA_SCHEMA)
    for name in ("is_race_on", "current_engine_rpm", "speed", "lap", "gear"):
        print(f"   {name}: {record[name]}")
    print()

    print("3. Decoding to a typed packet...")
    packet = decode_packet(datagram)
    print(f"   RPM: {packet.current_engine_rpm:.0f} / {packet.engine_max_rpm:.0f}")
    print(f"   Speed: {packet.speed * 3.6:.1f} km/h")
    print()

    print("4. Decoding a truncated packet...")
    try:
        decode(datagram[:200], FORZA_SCHEMA)
    except OutOfBounds as e:
        print(f"   Dropped: {e}")
    print()

    print("=" * 60)
    print("Example complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
