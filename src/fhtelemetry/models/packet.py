"""Forza Horizon "Data Out" packet layout and its typed model.

FORZA_SCHEMA is the wire layout of the 324-byte datagram; ForzaDataPacket is
the same layout as a Pydantic model, for callers that want attribute access
and validation instead of a plain dictionary.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from ..codec.decoder import decode
from ..codec.schema import FieldDescriptor, Schema, TargetType

PACKET_SIZE = 324

_U = TargetType.UINT
_I = TargetType.INT
_F = TargetType.FLOAT32
_B = TargetType.BOOL

_LAYOUT = [
    # name, offset, length, type
    ("is_race_on", 0, 4, _B),
    ("timestamp_ms", 4, 4, _U),
    ("engine_max_rpm", 8, 4, _F),
    ("engine_idle_rpm", 12, 4, _F),
    ("current_engine_rpm", 16, 4, _F),
    ("acceleration_x", 20, 4, _F),
    ("acceleration_y", 24, 4, _F),
    ("acceleration_z", 28, 4, _F),
    ("velocity_x", 32, 4, _F),
    ("velocity_y", 36, 4, _F),
    ("velocity_z", 40, 4, _F),
    ("angular_velocity_x", 44, 4, _F),
    ("angular_velocity_y", 48, 4, _F),
    ("angular_velocity_z", 52, 4, _F),
    ("yaw", 56, 4, _F),
    ("pitch", 60, 4, _F),
    ("roll", 64, 4, _F),
    ("norm_suspension_travel_fl", 68, 4, _F),
    ("norm_suspension_travel_fr", 72, 4, _F),
    ("norm_suspension_travel_rl", 76, 4, _F),
    ("norm_suspension_travel_rr", 80, 4, _F),
    ("tire_slip_ratio_fl", 84, 4, _F),
    ("tire_slip_ratio_fr", 88, 4, _F),
    ("tire_slip_ratio_rl", 92, 4, _F),
    ("tire_slip_ratio_rr", 96, 4, _F),
    ("wheel_rotation_speed_fl", 100, 4, _F),
    ("wheel_rotation_speed_fr", 104, 4, _F),
    ("wheel_rotation_speed_rl", 108, 4, _F),
    ("wheel_rotation_speed_rr", 112, 4, _F),
    ("wheel_on_rumble_strip_fl", 116, 4, _F),
    ("wheel_on_rumble_strip_fr", 120, 4, _F),
    ("wheel_on_rumble_strip_rl", 124, 4, _F),
    ("wheel_on_rumble_strip_rr", 128, 4, _F),
    ("wheel_in_puddle_fl", 132, 4, _F),
    ("wheel_in_puddle_fr", 136, 4, _F),
    ("wheel_in_puddle_rl", 140, 4, _F),
    ("wheel_in_puddle_rr", 144, 4, _F),
    ("surface_rumble_fl", 148, 4, _F),
    ("surface_rumble_fr", 152, 4, _F),
    ("surface_rumble_rl", 156, 4, _F),
    ("surface_rumble_rr", 160, 4, _F),
    ("tire_slip_angle_fl", 164, 4, _F),
    ("tire_slip_angle_fr", 168, 4, _F),
    ("tire_slip_angle_rl", 172, 4, _F),
    ("tire_slip_angle_rr", 176, 4, _F),
    ("tire_combined_slip_fl", 180, 4, _F),
    ("tire_combined_slip_fr", 184, 4, _F),
    ("tire_combined_slip_rl", 188, 4, _F),
    ("tire_combined_slip_rr", 192, 4, _F),
    ("suspension_travel_meters_fl", 196, 4, _F),
    ("suspension_travel_meters_fr", 200, 4, _F),
    ("suspension_travel_meters_rl", 204, 4, _F),
    ("suspension_travel_meters_rr", 208, 4, _F),
    ("car_ordinal", 212, 1, _U),
    ("car_class", 216, 1, _U),
    ("car_performance_index", 220, 1, _U),
    ("drive_train", 224, 1, _U),
    ("num_cylinders", 228, 1, _U),
    # 229-243 carry Horizon-specific data that is not mapped
    ("position_x", 244, 4, _F),
    ("position_y", 248, 4, _F),
    ("position_z", 252, 4, _F),
    ("speed", 256, 4, _F),
    ("power", 260, 4, _F),
    ("torque", 264, 4, _F),
    ("tire_temp_fl", 268, 4, _F),
    ("tire_temp_fr", 272, 4, _F),
    ("tire_temp_rl", 276, 4, _F),
    ("tire_temp_rr", 280, 4, _F),
    ("boost", 284, 4, _F),
    ("fuel", 288, 4, _F),
    ("distance", 292, 4, _F),
    ("best_lap_time", 296, 4, _F),
    ("last_lap_time", 300, 4, _F),
    ("current_lap_time", 304, 4, _F),
    ("current_race_time", 308, 4, _F),
    ("lap", 312, 2, _U),
    ("race_position", 314, 1, _U),
    ("accelerator", 315, 1, _U),
    ("brake", 316, 1, _U),
    ("clutch", 317, 1, _U),
    ("handbrake", 318, 1, _U),
    ("gear", 319, 1, _U),
    # Read as an unsigned byte (0-255); the wire value is not sign-extended
    ("steer", 320, 1, _I),
    ("normal_driving_line", 321, 1, _U),
    ("normal_ai_brake_difference", 322, 1, _U),
]

FORZA_SCHEMA = Schema(
    (FieldDescriptor(name, offset, length, target_type) for name, offset, length, target_type in _LAYOUT),
    packet_size=PACKET_SIZE,
    name="forza_data_out",
)


class ForzaDataPacket(BaseModel):
    """Typed view of one decoded Forza Horizon "Data Out" packet.

    Attribute names and order follow FORZA_SCHEMA exactly.

    Example:
        >>> packet = decode_packet(datagram)
        >>> packet.current_engine_rpm, packet.gear
    """

    model_config = ConfigDict(
        # Decoded values are already of the right Python type
        strict=True,
        frozen=True,
        extra="forbid",
    )

    is_race_on: bool
    timestamp_ms: int
    engine_max_rpm: float
    engine_idle_rpm: float
    current_engine_rpm: float
    acceleration_x: float
    acceleration_y: float
    acceleration_z: float
    velocity_x: float
    velocity_y: float
    velocity_z: float
    angular_velocity_x: float
    angular_velocity_y: float
    angular_velocity_z: float
    yaw: float
    pitch: float
    roll: float
    norm_suspension_travel_fl: float
    norm_suspension_travel_fr: float
    norm_suspension_travel_rl: float
    norm_suspension_travel_rr: float
    tire_slip_ratio_fl: float
    tire_slip_ratio_fr: float
    tire_slip_ratio_rl: float
    tire_slip_ratio_rr: float
    wheel_rotation_speed_fl: float
    wheel_rotation_speed_fr: float
    wheel_rotation_speed_rl: float
    wheel_rotation_speed_rr: float
    wheel_on_rumble_strip_fl: float
    wheel_on_rumble_strip_fr: float
    wheel_on_rumble_strip_rl: float
    wheel_on_rumble_strip_rr: float
    wheel_in_puddle_fl: float
    wheel_in_puddle_fr: float
    wheel_in_puddle_rl: float
    wheel_in_puddle_rr: float
    surface_rumble_fl: float
    surface_rumble_fr: float
    surface_rumble_rl: float
    surface_rumble_rr: float
    tire_slip_angle_fl: float
    tire_slip_angle_fr: float
    tire_slip_angle_rl: float
    tire_slip_angle_rr: float
    tire_combined_slip_fl: float
    tire_combined_slip_fr: float
    tire_combined_slip_rl: float
    tire_combined_slip_rr: float
    suspension_travel_meters_fl: float
    suspension_travel_meters_fr: float
    suspension_travel_meters_rl: float
    suspension_travel_meters_rr: float
    car_ordinal: int
    car_class: int
    car_performance_index: int
    drive_train: int
    num_cylinders: int
    position_x: float
    position_y: float
    position_z: float
    speed: float
    power: float
    torque: float
    tire_temp_fl: float
    tire_temp_fr: float
    tire_temp_rl: float
    tire_temp_rr: float
    boost: float
    fuel: float
    distance: float
    best_lap_time: float
    last_lap_time: float
    current_lap_time: float
    current_race_time: float
    lap: int
    race_position: int
    accelerator: int
    brake: int
    clutch: int
    handbrake: int
    gear: int
    steer: int
    normal_driving_line: int
    normal_ai_brake_difference: int


def decode_packet(buffer: bytes | bytearray | memoryview) -> ForzaDataPacket:
    """Decode a raw datagram with FORZA_SCHEMA into a ForzaDataPacket.

    Args:
        buffer: Raw packet bytes (at least 323 bytes; received buffers may be larger)

    Returns:
        Decoded packet model

    Raises:
        OutOfBounds: If the buffer is too short
    """
    return ForzaDataPacket(**decode(buffer, FORZA_SCHEMA))
