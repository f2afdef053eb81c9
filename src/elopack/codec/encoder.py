"""Schema-driven record encoder.

This module walks a compiled schema against a value and writes each field
through a shared ``BufferWriter``. Nested records and list elements are
encoded recursively into the same writer, so offsets continue monotonically
across the whole package. The integrity transform is applied by the caller
(``Codec.encode``) once the outermost record is complete.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import BaseModel

from ..exceptions import EncodeError
from .cursor import BufferWriter
from .schema import FieldKind, FieldSchema, Schema
from .types import LENGTH_PREFIX, MAX_LENGTH, WireType


def encode_record(schema: Schema, value: Any, writer: BufferWriter, path: str = "") -> None:
    """Encode one record's fields in declaration order.

    Args:
        schema: Compiled schema of the record
        value: Mapping (or pydantic model) holding the field values
        writer: Writer shared by the whole top-level encode
        path: Dotted path of the record, used in error messages

    Raises:
        EncodeError: If the value does not match the schema's shape
        BoundsError: If the writer runs out of capacity
    """
    record = _as_mapping(value, path or schema.name)

    for field_schema in schema:
        field_path = f"{path}.{field_schema.name}" if path else field_schema.name
        try:
            field_value = record[field_schema.name]
        except KeyError as err:
            raise EncodeError(f"Field {field_path}: missing from value") from err
        _encode_field(writer, field_schema, field_value, field_path)


def _encode_field(writer: BufferWriter, field_schema: FieldSchema, value: Any, path: str) -> None:
    if field_schema.kind is FieldKind.PRIMITIVE:
        assert field_schema.wire_type is not None
        _encode_primitive(writer, field_schema.wire_type, value, path)
        return

    if field_schema.kind is FieldKind.RECORD:
        assert field_schema.schema is not None
        encode_record(field_schema.schema, value, writer, path)
        return

    if isinstance(value, (str, bytes, bytearray, memoryview, Mapping)) or not isinstance(
        value, Sequence
    ):
        raise EncodeError(f"Field {path}: expected a list, got {type(value).__name__}")
    if len(value) > MAX_LENGTH:
        raise EncodeError(f"Field {path}: {len(value)} elements exceeds {MAX_LENGTH}")

    writer.write(LENGTH_PREFIX, len(value))
    for index, item in enumerate(value):
        item_path = f"{path}[{index}]"
        if field_schema.schema is not None:
            encode_record(field_schema.schema, item, writer, item_path)
        else:
            assert field_schema.wire_type is not None
            _encode_primitive(writer, field_schema.wire_type, item, item_path)


def _encode_primitive(writer: BufferWriter, wire_type: WireType, value: Any, path: str) -> None:
    if wire_type.is_integer:
        if not isinstance(value, int) or isinstance(value, bool):
            raise EncodeError(f"Field {path}: expected int, got {type(value).__name__}")
        if value < wire_type.min_value or value > wire_type.max_value:  # type: ignore[operator]
            raise EncodeError(
                f"Field {path}: value {value} out of bounds for {wire_type} "
                f"[{wire_type.min_value}, {wire_type.max_value}]"
            )
    elif wire_type is WireType.FLOAT:
        if not isinstance(value, (int, float)) or isinstance(value, bool):
            raise EncodeError(f"Field {path}: expected float, got {type(value).__name__}")
    elif wire_type is WireType.BOOL:
        if not isinstance(value, bool):
            raise EncodeError(f"Field {path}: expected bool, got {type(value).__name__}")

    try:
        writer.write(wire_type, value)
    except EncodeError as e:
        raise EncodeError(f"Field {path}: {e}") from e


def _as_mapping(value: Any, path: str) -> Mapping[str, Any]:
    if isinstance(value, Mapping):
        return value
    if isinstance(value, BaseModel):
        return dict(value)
    raise EncodeError(f"Record {path}: expected a mapping, got {type(value).__name__}")
