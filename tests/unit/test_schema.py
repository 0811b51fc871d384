"""Unit tests for schema construction and validation."""

from __future__ import annotations

import pytest

from fhtelemetry import (
    FORZA_SCHEMA,
    FieldDescriptor,
    Schema,
    SchemaError,
    TargetType,
    UnsupportedFieldSpec,
)
from fhtelemetry.utils import unmapped_ranges


class TestFieldDescriptor:
    """Test FieldDescriptor."""

    def test_end(self) -> None:
        """Test the derived end offset."""
        assert FieldDescriptor("lap", 312, 2, TargetType.UINT).end == 314

    def test_immutable(self) -> None:
        """Test descriptors cannot be modified."""
        field = FieldDescriptor("gear", 319, 1, TargetType.UINT)
        with pytest.raises(AttributeError):
            field.offset = 0  # type: ignore[misc]

    @pytest.mark.parametrize(
        "length,target_type",
        [
            (1, TargetType.UINT),
            (1, TargetType.INT),
            (2, TargetType.UINT),
            (2, TargetType.INT),
            (2, TargetType.FLOAT32),
            (2, TargetType.BOOL),
            (4, TargetType.UINT),
            (4, TargetType.INT),
            (4, TargetType.FLOAT32),
            (4, TargetType.BOOL),
        ],
    )
    def test_supported(self, length: int, target_type: TargetType) -> None:
        """Test every supported combination passes."""
        FieldDescriptor("x", 0, length, target_type).check_supported()

    @pytest.mark.parametrize(
        "length,target_type",
        [
            (1, TargetType.FLOAT32),
            (1, TargetType.BOOL),
            (3, TargetType.UINT),
            (8, TargetType.FLOAT32),
            (0, TargetType.UINT),
        ],
    )
    def test_unsupported(self, length: int, target_type: TargetType) -> None:
        """Test unsupported combinations are rejected."""
        with pytest.raises(UnsupportedFieldSpec) as excinfo:
            FieldDescriptor("bad", 0, length, target_type).check_supported()
        assert excinfo.value.field_name == "bad"
        assert excinfo.value.length == length


class TestSchema:
    """Test Schema validation and access."""

    def test_iteration_order(self) -> None:
        """Test fields iterate in declaration order."""
        schema = Schema(
            [
                FieldDescriptor("b", 4, 4, TargetType.FLOAT32),
                FieldDescriptor("a", 0, 4, TargetType.BOOL),
            ]
        )
        assert [field.name for field in schema] == ["b", "a"]
        assert schema.names == ("b", "a")
        assert len(schema) == 2

    def test_default_packet_size(self) -> None:
        """Test packet size defaults to the end of the last field."""
        schema = Schema([FieldDescriptor("a", 6, 2, TargetType.UINT)])
        assert schema.packet_size == 8
        assert schema.required_size == 8

    def test_lookup(self) -> None:
        """Test lookup by name."""
        schema = Schema([FieldDescriptor("gear", 0, 1, TargetType.UINT)])
        assert schema["gear"].offset == 0
        assert "gear" in schema
        assert "speed" not in schema
        with pytest.raises(KeyError):
            schema["speed"]

    def test_overlap_allowed(self) -> None:
        """Test overlapping fields are accepted."""
        schema = Schema(
            [
                FieldDescriptor("whole", 0, 4, TargetType.UINT),
                FieldDescriptor("low", 0, 2, TargetType.UINT),
            ]
        )
        assert len(schema) == 2

    def test_unsupported_field_fails_at_construction(self) -> None:
        """Test schema construction rejects unsupported specs."""
        with pytest.raises(UnsupportedFieldSpec):
            Schema([FieldDescriptor("flag", 0, 1, TargetType.BOOL)])

    def test_unsupported_is_schema_error(self) -> None:
        """Test UnsupportedFieldSpec is catchable as SchemaError."""
        with pytest.raises(SchemaError):
            Schema([FieldDescriptor("x", 0, 3, TargetType.UINT)])

    def test_empty(self) -> None:
        """Test empty schemas are rejected."""
        with pytest.raises(SchemaError, match="no fields"):
            Schema([])

    def test_duplicate_names(self) -> None:
        """Test duplicate names are rejected."""
        with pytest.raises(SchemaError, match="duplicate"):
            Schema(
                [
                    FieldDescriptor("a", 0, 1, TargetType.UINT),
                    FieldDescriptor("a", 1, 1, TargetType.UINT),
                ]
            )

    def test_negative_offset(self) -> None:
        """Test negative offsets are rejected."""
        with pytest.raises(SchemaError, match="negative offset"):
            Schema([FieldDescriptor("a", -1, 1, TargetType.UINT)])

    def test_field_past_packet_size(self) -> None:
        """Test fields must fit the declared packet size."""
        with pytest.raises(SchemaError, match="exceed declared packet size"):
            Schema([FieldDescriptor("a", 2, 4, TargetType.FLOAT32)], packet_size=4)


class TestCanonicalSchema:
    """Test the Forza "Data Out" layout."""

    def test_size(self) -> None:
        """Test field count and packet size."""
        assert len(FORZA_SCHEMA) == 85
        assert FORZA_SCHEMA.packet_size == 324
        assert FORZA_SCHEMA.required_size == 323

    def test_offsets_span(self) -> None:
        """Test the layout covers offsets 0-322."""
        assert min(field.offset for field in FORZA_SCHEMA) == 0
        assert max(field.end for field in FORZA_SCHEMA) - 1 == 322

    @pytest.mark.parametrize(
        "name,offset,length,target_type",
        [
            ("is_race_on", 0, 4, TargetType.BOOL),
            ("timestamp_ms", 4, 4, TargetType.UINT),
            ("current_engine_rpm", 16, 4, TargetType.FLOAT32),
            ("suspension_travel_meters_rr", 208, 4, TargetType.FLOAT32),
            ("car_ordinal", 212, 1, TargetType.UINT),
            ("num_cylinders", 228, 1, TargetType.UINT),
            ("position_x", 244, 4, TargetType.FLOAT32),
            ("current_race_time", 308, 4, TargetType.FLOAT32),
            ("lap", 312, 2, TargetType.UINT),
            ("gear", 319, 1, TargetType.UINT),
            ("steer", 320, 1, TargetType.INT),
            ("normal_ai_brake_difference", 322, 1, TargetType.UINT),
        ],
    )
    def test_wire_positions(
        self, name: str, offset: int, length: int, target_type: TargetType
    ) -> None:
        """Test representative fields sit at their wire positions."""
        field = FORZA_SCHEMA[name]
        assert (field.offset, field.length, field.target_type) == (offset, length, target_type)

    def test_no_overlap(self) -> None:
        """Test canonical fields never share bytes."""
        used: set[int] = set()
        for field in FORZA_SCHEMA:
            span = set(range(field.offset, field.end))
            assert not used & span, field.name
            used |= span

    def test_unmapped_bytes(self) -> None:
        """Test the bytes the layout leaves unmapped, including the 229-243 block."""
        assert unmapped_ranges(FORZA_SCHEMA) == [
            (213, 216),
            (217, 220),
            (221, 224),
            (225, 228),
            (229, 244),
            (323, 324),
        ]
        assert FORZA_SCHEMA["num_cylinders"].end == 229
        assert FORZA_SCHEMA["position_x"].offset == 244

    def test_two_byte_fields_are_uint(self) -> None:
        """Test only UINT is declared at length 2."""
        for field in FORZA_SCHEMA:
            if field.length == 2:
                assert field.target_type is TargetType.UINT
