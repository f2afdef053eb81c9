"""Package size calculation utilities.

This module provides functions to calculate the encoded size of a package
without actually encoding it.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional, Union

from pydantic import BaseModel

from ..codec.schema import FieldKind, FieldSchema, RawSchema, Schema
from ..codec.types import LENGTH_PREFIX, WireType

# The trailing check byte of every top-level package.
CHECK_BYTE_SIZE = 1


def fixed_size(schema: Union[RawSchema, Schema]) -> Optional[int]:
    """Return the package size for a fixed-layout schema.

    Args:
        schema: Schema declaration or compiled Schema

    Returns:
        Package size in bytes including the check byte, or None if the schema
        contains binary or list fields

    Example:
        >>> fixed_size({"id": "uint16", "active": "bool"})
        4  # 2 + 1 + check byte
    """
    payload = Schema.compile(schema).fixed_size()
    return None if payload is None else payload + CHECK_BYTE_SIZE


def encoded_size(schema: Union[RawSchema, Schema], value: Any) -> int:
    """Calculate the exact package size of a value without encoding it.

    The value is assumed to match the schema.

    Args:
        schema: Schema declaration or compiled Schema
        value: Value to measure

    Returns:
        Package size in bytes including the check byte

    Example:
        >>> encoded_size({"name": "binary", "tags": ["uint8"]}, {"name": b"ABC", "tags": [1, 2]})
        10  # (2 + 3) + (2 + 2) + check byte
    """
    return _record_size(Schema.compile(schema), value) + CHECK_BYTE_SIZE


def field_sizes(schema: Union[RawSchema, Schema]) -> dict[str, Optional[int]]:
    """Get the fixed size in bytes of each top-level field.

    Args:
        schema: Schema declaration or compiled Schema

    Returns:
        Dictionary mapping field names to sizes; None for variable-length fields

    Example:
        >>> field_sizes({"id": "uint16", "name": "binary"})
        {'id': 2, 'name': None}
    """
    return {field.name: field.fixed_size() for field in Schema.compile(schema)}


def _record_size(schema: Schema, value: Any) -> int:
    record = dict(value) if isinstance(value, BaseModel) else value
    if not isinstance(record, Mapping):
        raise TypeError(f"Expected a mapping for {schema.name}, got {type(value).__name__}")
    return sum(_field_size(field, record[field.name]) for field in schema)


def _field_size(field: FieldSchema, value: Any) -> int:
    if field.kind is FieldKind.RECORD:
        assert field.schema is not None
        return _record_size(field.schema, value)

    if field.kind is FieldKind.LIST:
        items = list(value)
        if field.schema is not None:
            return LENGTH_PREFIX.size + sum(_record_size(field.schema, item) for item in items)
        assert field.wire_type is not None
        return LENGTH_PREFIX.size + sum(_primitive_size(field.wire_type, item) for item in items)

    assert field.wire_type is not None
    return _primitive_size(field.wire_type, value)


def _primitive_size(wire_type: WireType, value: Any) -> int:
    if wire_type is WireType.BINARY:
        return LENGTH_PREFIX.size + len(value)
    return wire_type.size
