#!/usr/bin/env python3
"""Basic usage example for elopack.

This example demonstrates:
1. Declaring a schema as a plain dict
2. Encoding a value into a sealed package
3. Decoding it back and detecting corruption
4. The same record declared as a pydantic message
"""

from __future__ import annotations

from typing import List

from elopack import (
    BaseMessage,
    Binary,
    IntegrityError,
    UInt8,
    UInt16,
    decode,
    decode_message,
    encode,
    encode_message,
    field_sizes,
)

SCHEMA = {"id": "uint16", "name": "binary", "tags": ["uint8"]}


class Tagged(BaseMessage):
    """The same record as SCHEMA, declared as a message."""

    id: UInt16
    name: Binary
    tags: List[UInt8]


def main() -> None:
    """Run the basic usage example."""
    print("=" * 60)
    print("elopack Basic Usage Example")
    print("=" * 60)
    print()

    print("1. Field sizes (None = variable length)...")
    for field_name, size in field_sizes(SCHEMA).items():
        print(f"   {field_name}: {size}")
    print()

    print("2. Encoding...")
    value = {"id": 7, "name": b"ABC", "tags": [1, 2, 3]}
    data = encode(SCHEMA, value)
    print(f"   Encoded size: {len(data)} bytes")
    print(f"   Hex: {data.hex()}")
    print()

    print("3. Decoding...")
    decoded = decode(SCHEMA, data)
    print(f"   {decoded}")
    print(f"   Round-trip OK: {decoded == value}")
    print()

    print("4. Corrupting one bit...")
    corrupted = bytearray(data)
    corrupted[3] ^= 0x10
    try:
        decode(SCHEMA, bytes(corrupted))
    except IntegrityError as e:
        print(f"   Detected: {e}")
    print()

    print("5. Using a message class...")
    msg = Tagged(id=7, name=b"ABC", tags=[1, 2, 3])
    print(f"   Same bytes as the dict schema: {encode_message(msg) == data}")
    print(f"   Decoded: {decode_message(Tagged, data)!r}")


if __name__ == "__main__":
    main()
