"""Declarative packet schema.

A schema is an ordered, immutable table of field descriptors. Each descriptor
says where a field lives in the datagram (offset and byte length) and what
Python value it decodes to (target type).
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Tuple

from ..exceptions import SchemaError, UnsupportedFieldSpec


class TargetType(enum.Enum):
    """Semantic type a field decodes to."""

    UINT = "uint"
    INT = "int"
    FLOAT32 = "float32"
    BOOL = "bool"

    def __str__(self) -> str:
        return self.value


# (length, target_type) pairs the decoder knows how to handle
SUPPORTED_FIELD_SPECS = frozenset(
    {
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
    }
)


@dataclass(frozen=True)
class FieldDescriptor:
    """Where and how to extract one field from a packet.

    Attributes:
        name: Field name, unique within a schema
        offset: Byte index into the packet where the field starts
        length: Number of bytes (1, 2 or 4)
        target_type: Semantic type of the decoded value
    """

    name: str
    offset: int
    length: int
    target_type: TargetType

    @property
    def end(self) -> int:
        """First byte index past this field."""
        return self.offset + self.length

    def check_supported(self) -> None:
        """Raise UnsupportedFieldSpec unless (length, target_type) is decodable.

        Raises:
            UnsupportedFieldSpec: If the combination is not in SUPPORTED_FIELD_SPECS
        """
        if (self.length, self.target_type) not in SUPPORTED_FIELD_SPECS:
            raise UnsupportedFieldSpec(self.name, self.length, self.target_type)


class Schema:
    """Ordered, read-only table of field descriptors.

    The schema is validated once on construction; decode calls only iterate it.

    Example:
        >>> schema = Schema(
        ...     [
        ...         FieldDescriptor("is_race_on", 0, 4, TargetType.BOOL),
        ...         FieldDescriptor("gear", 4, 1, TargetType.UINT),
        ...     ],
        ...     packet_size=8,
        ... )
        >>> [field.name for field in schema]
        ['is_race_on', 'gear']
    """

    __slots__ = ("_fields", "_by_name", "_packet_size", "_name")

    def __init__(
        self,
        fields: Iterable[FieldDescriptor],
        packet_size: Optional[int] = None,
        name: str = "schema",
    ) -> None:
        """Build and validate a schema.

        Args:
            fields: Field descriptors in decode order
            packet_size: Declared packet size in bytes; defaults to the end of
                the last-ending field
            name: Human readable schema name (used in messages)

        Raises:
            UnsupportedFieldSpec: If a field has an invalid length/type combination
            SchemaError: If the table is otherwise inconsistent
        """
        field_tuple: Tuple[FieldDescriptor, ...] = tuple(fields)
        if not field_tuple:
            raise SchemaError(f"Schema {name} declares no fields")

        by_name = {}
        for field in field_tuple:
            field.check_supported()
            if field.offset < 0:
                raise SchemaError(f"Field {field.name}: negative offset {field.offset}")
            if field.name in by_name:
                raise SchemaError(f"Schema {name}: duplicate field name {field.name!r}")
            by_name[field.name] = field

        required = max(field.end for field in field_tuple)
        if packet_size is None:
            packet_size = required
        for field in field_tuple:
            if field.end > packet_size:
                raise SchemaError(
                    f"Field {field.name}: bytes [{field.offset}, {field.end}) exceed "
                    f"declared packet size {packet_size}"
                )

        self._fields = field_tuple
        self._by_name = by_name
        self._packet_size = packet_size
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    @property
    def fields(self) -> Tuple[FieldDescriptor, ...]:
        return self._fields

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(field.name for field in self._fields)

    @property
    def packet_size(self) -> int:
        """Declared size of a packet in bytes."""
        return self._packet_size

    @property
    def required_size(self) -> int:
        """Smallest buffer length that holds every field."""
        return max(field.end for field in self._fields)

    def __iter__(self) -> Iterator[FieldDescriptor]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __getitem__(self, name: str) -> FieldDescriptor:
        return self._by_name[name]

    def __repr__(self) -> str:
        return f"Schema(name={self._name!r}, fields={len(self._fields)}, packet_size={self._packet_size})"
