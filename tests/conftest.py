"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from typing import Any

import pytest

from fhtelemetry import FORZA_SCHEMA, PACKET_SIZE, TargetType, encode


def make_zero_record() -> dict[str, Any]:
    """Record with every canonical field at its zero value."""
    record: dict[str, Any] = {}
    for field in FORZA_SCHEMA:
        if field.target_type is TargetType.BOOL:
            record[field.name] = False
        elif field.target_type is TargetType.FLOAT32:
            record[field.name] = 0.0
        else:
            record[field.name] = 0
    return record


@pytest.fixture
def zero_record() -> dict[str, Any]:
    """Every canonical field at its zero value."""
    return make_zero_record()


@pytest.fixture
def zero_packet() -> bytes:
    """324 zero bytes."""
    return bytes(PACKET_SIZE)


@pytest.fixture
def racing_record() -> dict[str, Any]:
    """Record of a car mid-race."""
    record = make_zero_record()
    record.update(
        is_race_on=True,
        timestamp_ms=123456,
        engine_max_rpm=8000.0,
        engine_idle_rpm=800.0,
        current_engine_rpm=6543.5,
        velocity_z=-42.25,
        speed=55.5,
        car_ordinal=200,
        car_class=5,
        num_cylinders=8,
        tire_temp_fl=180.5,
        fuel=0.75,
        best_lap_time=92.125,
        lap=3,
        race_position=2,
        accelerator=255,
        brake=0,
        gear=4,
        steer=250,
        normal_driving_line=127,
    )
    return record


@pytest.fixture
def racing_packet(racing_record: dict[str, Any]) -> bytes:
    """Encoded form of racing_record."""
    return encode(racing_record, FORZA_SCHEMA)
