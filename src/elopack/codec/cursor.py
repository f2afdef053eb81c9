"""Position-tracked buffer cursors.

This module provides the low-level reader and writer used by the schema codec.
Each cursor owns one byte offset; recursive encodes and decodes share a single
cursor so nested offsets stay consistent. All operations are big-endian.
"""

from __future__ import annotations

import struct
from typing import Any, Optional, Union

from ..exceptions import BoundsError, EncodeError
from .types import LENGTH_PREFIX, MAX_LENGTH, WireType

BytesLike = Union[bytes, bytearray, memoryview]

DEFAULT_CAPACITY = 102400


class BufferReader:
    """Reads primitive values sequentially from a byte buffer.

    Example:
        >>> reader = BufferReader(b"\\x00\\x07\\x01")
        >>> reader.read(WireType.UINT16)
        7
        >>> reader.read(WireType.BOOL)
        True
    """

    def __init__(self, buffer: BytesLike = b"") -> None:
        """Initialize a reader over the given buffer.

        Args:
            buffer: Byte buffer to read from
        """
        self._buffer: BytesLike = buffer
        self._offset = 0

    @property
    def offset(self) -> int:
        """Current read position in bytes."""
        return self._offset

    def remaining(self) -> int:
        """Return the number of unread bytes."""
        return len(self._buffer) - self._offset

    def reset(self, buffer: Optional[BytesLike] = None) -> None:
        """Zero the offset, optionally rebinding to a new buffer.

        Args:
            buffer: New buffer to read from (keeps the current one if None)
        """
        self._offset = 0
        if buffer is not None:
            self._buffer = buffer

    def read(self, wire_type: Union[WireType, str]) -> Any:
        """Read one primitive value and advance past it.

        Args:
            wire_type: Wire type to decode, as a member or a plain tag

        Returns:
            int, float, bool or bytes depending on the wire type

        Raises:
            BoundsError: If the value extends past the end of the buffer
            SchemaError: If the tag is not a known wire type
        """
        wire_type = WireType.parse(wire_type)
        if wire_type is WireType.BINARY:
            length = self.read(LENGTH_PREFIX)
            self._require(length, wire_type)
            value = bytes(self._buffer[self._offset : self._offset + length])
            self._offset += length
            return value

        size = wire_type.size
        self._require(size, wire_type)
        (value,) = struct.unpack_from(wire_type.struct_format, self._buffer, self._offset)
        self._offset += size

        if wire_type is WireType.BOOL:
            return value != 0
        return value

    def _require(self, size: int, wire_type: WireType) -> None:
        if self._offset + size > len(self._buffer):
            raise BoundsError(
                f"Read of {wire_type} ({size} bytes) at offset {self._offset} "
                f"exceeds buffer length {len(self._buffer)}"
            )


class BufferWriter:
    """Writes primitive values sequentially into a fixed-capacity buffer.

    The backing buffer may be much larger than the written data; ``finalize()``
    returns a copy trimmed to the bytes actually written.

    Example:
        >>> writer = BufferWriter(bytearray(16))
        >>> writer.write(WireType.UINT16, 7)
        >>> writer.write(WireType.BINARY, b"ABC")
        >>> bytes(writer.finalize())
        b'\\x00\\x07\\x00\\x03ABC'
    """

    def __init__(self, buffer: Optional[bytearray] = None) -> None:
        """Initialize a writer.

        Args:
            buffer: Backing buffer (a DEFAULT_CAPACITY buffer is allocated if None)
        """
        self._buffer = buffer if buffer is not None else bytearray(DEFAULT_CAPACITY)
        self._offset = 0

    @property
    def offset(self) -> int:
        """Current write position (the logical written length)."""
        return self._offset

    @property
    def capacity(self) -> int:
        """Allocated size of the backing buffer."""
        return len(self._buffer)

    def reset(self, buffer: Optional[bytearray] = None) -> None:
        """Prepare the writer for a new top-level encode.

        With a buffer, rebinds to it. Without one, the previously written
        region is zero-filled so no stale bytes leak into the next encode.

        Args:
            buffer: Fresh backing buffer, or None to reuse the current one
        """
        if buffer is not None:
            self._buffer = buffer
        else:
            self._buffer[: self._offset] = bytes(self._offset)
        self._offset = 0

    def write(self, wire_type: Union[WireType, str], value: Any) -> None:
        """Write one primitive value and advance past it.

        Args:
            wire_type: Wire type to encode, as a member or a plain tag
            value: Value to encode

        Raises:
            BoundsError: If the value does not fit in the remaining capacity
            EncodeError: If the value cannot be represented by the wire type
            SchemaError: If the tag is not a known wire type
        """
        wire_type = WireType.parse(wire_type)
        if wire_type is WireType.BINARY:
            if not isinstance(value, (bytes, bytearray, memoryview)):
                raise EncodeError(f"binary expects bytes-like, got {type(value).__name__}")
            data = bytes(value)
            if len(data) > MAX_LENGTH:
                raise EncodeError(f"binary length {len(data)} exceeds {MAX_LENGTH} bytes")
            self._require(2 + len(data), wire_type)
            self.write(LENGTH_PREFIX, len(data))
            self._buffer[self._offset : self._offset + len(data)] = data
            self._offset += len(data)
            return

        if wire_type is WireType.BOOL:
            value = 1 if value else 0

        size = wire_type.size
        self._require(size, wire_type)
        try:
            struct.pack_into(wire_type.struct_format, self._buffer, self._offset, value)
        except (struct.error, OverflowError) as e:
            raise EncodeError(f"Cannot encode {value!r} as {wire_type}: {e}") from e
        self._offset += size

    def finalize(self) -> bytearray:
        """Return a copy of the written bytes, trimmed to the current offset."""
        return self._buffer[: self._offset]

    get_buffer = finalize

    def _require(self, size: int, wire_type: WireType) -> None:
        if self._offset + size > len(self._buffer):
            raise BoundsError(
                f"Write of {wire_type} ({size} bytes) at offset {self._offset} "
                f"exceeds buffer capacity {len(self._buffer)}"
            )
