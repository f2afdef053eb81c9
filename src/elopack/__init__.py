"""elopack: Schema-driven Binary Codec

A Python library for encoding records into compact fixed-layout binary
packages from a declarative schema, and decoding them back with a built-in
integrity check against corruption and truncation.

Key Features:
- Plain-dict schemas: primitive wire types, nested records, homogeneous lists
- Big-endian fixed-width primitives and length-prefixed binary blobs
- Trailing check byte plus length/position-keyed obfuscation per package
- Optional pydantic message models and boundary validation

Quick Start:
    >>> from elopack import encode, decode
    >>>
    >>> schema = {"id": "uint16", "name": "binary", "tags": ["uint8"]}
    >>> data = encode(schema, {"id": 7, "name": b"ABC", "tags": [1, 2, 3]})
    >>> decode(schema, data)
    {'id': 7, 'name': b'ABC', 'tags': [1, 2, 3]}
"""

from __future__ import annotations

__version__ = "0.1.0"

from .codec import (
    WIRE_SIZES,
    BufferReader,
    BufferWriter,
    Codec,
    FieldKind,
    FieldSchema,
    Schema,
    WireType,
    WriterPool,
    decode,
    encode,
    validate,
)
from .config import CodecConfig
from .exceptions import (
    BoundsError,
    ChecksumMismatchError,
    DecodeError,
    ElopackError,
    EncodeError,
    IntegrityError,
    PackageLengthError,
    SchemaError,
)
from .models import (
    BaseMessage,
    Binary,
    Bool,
    Float32,
    Int8,
    Int16,
    Int32,
    UInt8,
    UInt16,
    UInt32,
    Wire,
    decode_message,
    encode_message,
)
from .utils import encoded_size, field_sizes, fixed_size

__all__ = [
    # Core API
    "encode",
    "decode",
    "validate",
    "Codec",
    "CodecConfig",
    # Schema
    "Schema",
    "FieldSchema",
    "FieldKind",
    "WireType",
    "WIRE_SIZES",
    # Cursors
    "BufferReader",
    "BufferWriter",
    "WriterPool",
    # Messages
    "BaseMessage",
    "encode_message",
    "decode_message",
    "Int8",
    "Int16",
    "Int32",
    "UInt8",
    "UInt16",
    "UInt32",
    "Float32",
    "Bool",
    "Binary",
    "Wire",
    # Exceptions
    "ElopackError",
    "SchemaError",
    "EncodeError",
    "DecodeError",
    "IntegrityError",
    "ChecksumMismatchError",
    "PackageLengthError",
    "BoundsError",
    # Sizing
    "encoded_size",
    "fixed_size",
    "field_sizes",
    # Version
    "__version__",
]
