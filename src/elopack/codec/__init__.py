"""Schema-driven binary codec for elopack.

This module provides the wire type table, buffer cursors, schema compilation,
the recursive record encoder/decoder and the package integrity transform.
"""

from __future__ import annotations

from .core import Codec, decode, encode, validate
from .cursor import BufferReader, BufferWriter
from .pool import WriterPool
from .schema import FieldKind, FieldSchema, Schema
from .types import WIRE_SIZES, WireType

__all__ = [
    "encode",
    "decode",
    "validate",
    "Codec",
    "Schema",
    "FieldSchema",
    "FieldKind",
    "WireType",
    "WIRE_SIZES",
    "BufferReader",
    "BufferWriter",
    "WriterPool",
]
