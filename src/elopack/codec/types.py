"""Primitive wire types and their fixed byte widths.

Multi-byte integers and floats are always big-endian (network byte order).
The ``binary`` type has no fixed width; its length travels in an implicit
``uint16`` prefix.
"""

from __future__ import annotations

import enum
from typing import Any, Optional

from ..exceptions import SchemaError


class WireType(str, enum.Enum):
    """Primitive kinds understood by the codec.

    Members are ``str`` subclasses so schemas may be written with plain tags:

        >>> WireType("uint16") is WireType.UINT16
        True
        >>> WireType.UINT16 == "uint16"
        True
    """

    INT8 = "int8"
    INT16 = "int16"
    INT32 = "int32"
    UINT8 = "uint8"
    UINT16 = "uint16"
    UINT32 = "uint32"
    FLOAT = "float"
    BOOL = "bool"
    BINARY = "binary"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, tag: Any) -> WireType:
        """Resolve a tag string (or member) to a WireType.

        Raises:
            SchemaError: If the tag is not a known wire type
        """
        if isinstance(tag, cls):
            return tag
        if isinstance(tag, str):
            try:
                return cls(tag)
            except ValueError:
                pass
        raise SchemaError(
            f"Unknown wire type {tag!r}. Supported: {', '.join(t.value for t in cls)}"
        )

    @property
    def size(self) -> int:
        """Fixed byte width (0 for ``binary``)."""
        return WIRE_SIZES[self]

    @property
    def struct_format(self) -> Optional[str]:
        """Big-endian ``struct`` format code, or None for ``binary``."""
        return _STRUCT_FORMATS.get(self)

    @property
    def is_integer(self) -> bool:
        return self in _INT_RANGES

    @property
    def min_value(self) -> Optional[int]:
        """Smallest representable integer, or None for non-integer types."""
        bounds = _INT_RANGES.get(self)
        return bounds[0] if bounds else None

    @property
    def max_value(self) -> Optional[int]:
        """Largest representable integer, or None for non-integer types."""
        bounds = _INT_RANGES.get(self)
        return bounds[1] if bounds else None


WIRE_SIZES: dict[WireType, int] = {
    WireType.INT8: 1,
    WireType.INT16: 2,
    WireType.INT32: 4,
    WireType.UINT8: 1,
    WireType.UINT16: 2,
    WireType.UINT32: 4,
    WireType.FLOAT: 4,
    WireType.BOOL: 1,
    WireType.BINARY: 0,
}

_STRUCT_FORMATS: dict[WireType, str] = {
    WireType.INT8: ">b",
    WireType.INT16: ">h",
    WireType.INT32: ">i",
    WireType.UINT8: ">B",
    WireType.UINT16: ">H",
    WireType.UINT32: ">I",
    WireType.FLOAT: ">f",
    WireType.BOOL: ">B",
}

_INT_RANGES: dict[WireType, tuple[int, int]] = {
    WireType.INT8: (-(1 << 7), (1 << 7) - 1),
    WireType.INT16: (-(1 << 15), (1 << 15) - 1),
    WireType.INT32: (-(1 << 31), (1 << 31) - 1),
    WireType.UINT8: (0, (1 << 8) - 1),
    WireType.UINT16: (0, (1 << 16) - 1),
    WireType.UINT32: (0, (1 << 32) - 1),
}

# Length prefix of binary fields and element count of list fields.
LENGTH_PREFIX = WireType.UINT16
MAX_LENGTH = (1 << 16) - 1
