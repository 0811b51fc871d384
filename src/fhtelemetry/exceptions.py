"""Exception hierarchy for fhtelemetry.

All exceptions inherit from TelemetryError for easy catching of any
fhtelemetry-specific error.
"""

from __future__ import annotations


class TelemetryError(Exception):
    """Base exception for all fhtelemetry errors."""

    pass


class SchemaError(TelemetryError):
    """Raised when a packet schema is invalid.

    Examples:
        - Duplicate field names
        - Negative offsets
        - A field extending past the declared packet size
    """

    pass


class UnsupportedFieldSpec(SchemaError):
    """Raised when a field declares a length/type combination the decoder cannot handle.

    This is a static defect in the schema table, reported when the schema is
    built rather than once per packet.
    """

    def __init__(self, field_name: str, length: int, target_type: object) -> None:
        self.field_name = field_name
        self.length = length
        self.target_type = target_type
        super().__init__(
            f"Field {field_name}: unsupported field spec "
            f"(length={length}, target_type={target_type})"
        )


class DecodeError(TelemetryError):
    """Raised when decoding a packet fails."""

    pass


class OutOfBounds(DecodeError):
    """Raised when a buffer is too short for a declared field.

    Recoverable: transports may deliver truncated packets, so callers should
    drop the packet and carry on.

    Attributes:
        field_name: Name of the first field that did not fit
        offset: Byte offset of that field
        length: Byte length of that field
        buffer_length: Length of the buffer that was decoded
    """

    def __init__(self, field_name: str, offset: int, length: int, buffer_length: int) -> None:
        self.field_name = field_name
        self.offset = offset
        self.length = length
        self.buffer_length = buffer_length
        super().__init__(
            f"Field {field_name}: needs bytes [{offset}, {offset + length}) "
            f"but buffer has only {buffer_length} bytes"
        )


class EncodeError(TelemetryError):
    """Raised when a record cannot be written back into a packet.

    Examples:
        - Missing or unknown field names
        - Integer out of range for its byte width
        - Integer not exactly representable as a single-precision float
    """

    pass
