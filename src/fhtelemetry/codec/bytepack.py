"""Byte-level packing and unpacking utilities.

This module provides the low-level little-endian primitives the codec is
built on. Fields are addressed by absolute byte offset, not by a cursor.
"""

from __future__ import annotations

import struct

_UINT32 = struct.Struct("<I")
_FLOAT32 = struct.Struct("<f")


def float32_from_bits(bits: int) -> float:
    """Reinterpret a 32-bit pattern as an IEEE-754 single-precision value.

    This is a bit-for-bit reinterpretation, not a numeric conversion.

    Args:
        bits: Unsigned 32-bit integer

    Returns:
        The float whose single-precision encoding is ``bits``

    Example:
        >>> float32_from_bits(0x3F800000)
        1.0
    """
    return _FLOAT32.unpack(_UINT32.pack(bits))[0]


def float32_to_bits(value: float) -> int:
    """Return the IEEE-754 single-precision bit pattern of a float.

    Raises:
        OverflowError: If value is finite but beyond the single-precision range
    """
    return _UINT32.unpack(_FLOAT32.pack(value))[0]


class ByteUnpacker:
    """Reads little-endian values from a read-only view of a buffer.

    The wrapped buffer is never written to.

    Example:
        >>> unpacker = ByteUnpacker(b"\\x01\\x02\\x00\\x00\\x80\\x3f")
        >>> unpacker.read_uint(0, 2)
        513
        >>> unpacker.read_float32(2)
        1.0
    """

    def __init__(self, data: bytes | bytearray | memoryview) -> None:
        """Initialize an unpacker over the given data.

        Args:
            data: Any bytes-like object
        """
        self._view = memoryview(data).cast("B").toreadonly()

    def __len__(self) -> int:
        return len(self._view)

    def read_uint(self, offset: int, length: int) -> int:
        """Read an unsigned little-endian integer of ``length`` bytes.

        Args:
            offset: Byte offset of the first byte
            length: Number of bytes to read

        Returns:
            Unsigned integer value

        Raises:
            IndexError: If the bytes lie outside the buffer
        """
        if offset < 0 or offset + length > len(self._view):
            raise IndexError(
                f"Not enough bytes: need [{offset}, {offset + length}), have {len(self._view)}"
            )
        return int.from_bytes(self._view[offset : offset + length], "little")

    def read_float32(self, offset: int) -> float:
        """Read four bytes as a little-endian uint32 and reinterpret them as a float.

        Raises:
            IndexError: If the bytes lie outside the buffer
        """
        return float32_from_bits(self.read_uint(offset, 4))


class BytePacker:
    """Writes little-endian values into a fixed-size buffer.

    Example:
        >>> packer = BytePacker(6)
        >>> packer.write_uint(0, 513, 2)
        >>> packer.write_float32(2, 1.0)
        >>> packer.to_bytes()
        b'\\x01\\x02\\x00\\x00\\x80?'
    """

    def __init__(self, size: int, base: bytes | None = None) -> None:
        """Initialize a zero-filled buffer, or a copy of ``base``.

        Args:
            size: Buffer size in bytes
            base: Optional initial contents; must be exactly ``size`` bytes
        """
        if base is None:
            self._buffer = bytearray(size)
        else:
            if len(base) != size:
                raise ValueError(f"base must be {size} bytes, got {len(base)}")
            self._buffer = bytearray(base)

    def write_uint(self, offset: int, value: int, length: int) -> None:
        """Write an unsigned little-endian integer of ``length`` bytes.

        Raises:
            ValueError: If value is negative or doesn't fit in ``length`` bytes
            IndexError: If the bytes lie outside the buffer
        """
        if value < 0:
            raise ValueError(f"write_uint requires non-negative value, got {value}")
        max_value = (1 << (8 * length)) - 1
        if value > max_value:
            raise ValueError(f"Value {value} requires more than {length} bytes (max: {max_value})")
        if offset < 0 or offset + length > len(self._buffer):
            raise IndexError(
                f"Write [{offset}, {offset + length}) outside buffer of {len(self._buffer)} bytes"
            )
        self._buffer[offset : offset + length] = value.to_bytes(length, "little")

    def write_float32(self, offset: int, value: float) -> None:
        """Write a float as its little-endian single-precision bit pattern.

        Raises:
            OverflowError: If value is beyond the single-precision range
        """
        self.write_uint(offset, float32_to_bits(value), 4)

    def to_bytes(self) -> bytes:
        return bytes(self._buffer)
