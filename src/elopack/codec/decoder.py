"""Schema-driven record decoder.

This module walks a compiled schema against a ``BufferReader`` and rebuilds
the record as a plain dict. Nested records and list elements are decoded
recursively from the same reader. The package must already have passed the
integrity check (``Codec.decode`` does this before calling in).
"""

from __future__ import annotations

from typing import Any

from .cursor import BufferReader
from .schema import FieldKind, FieldSchema, Schema
from .types import LENGTH_PREFIX


def decode_record(schema: Schema, reader: BufferReader) -> dict[str, Any]:
    """Decode one record's fields in declaration order.

    Args:
        schema: Compiled schema of the record
        reader: Reader shared by the whole top-level decode

    Returns:
        Dict mapping field names to decoded values

    Raises:
        BoundsError: If the buffer ends before the record is complete
    """
    return {field_schema.name: _decode_field(reader, field_schema) for field_schema in schema}


def _decode_field(reader: BufferReader, field_schema: FieldSchema) -> Any:
    if field_schema.kind is FieldKind.PRIMITIVE:
        return reader.read(field_schema.wire_type)  # type: ignore[arg-type]

    if field_schema.kind is FieldKind.RECORD:
        assert field_schema.schema is not None
        return decode_record(field_schema.schema, reader)

    count = reader.read(LENGTH_PREFIX)
    if not count:
        return []

    if field_schema.schema is not None:
        return [decode_record(field_schema.schema, reader) for _ in range(count)]
    return [reader.read(field_schema.wire_type) for _ in range(count)]  # type: ignore[arg-type]
