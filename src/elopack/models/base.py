"""Base message class for pydantic-modelled records.

A ``BaseMessage`` subclass declares a record with ordinary pydantic fields;
its elopack schema is derived from the field annotations in declaration order.
"""

from __future__ import annotations

from typing import Annotated, Any, ClassVar, List, Optional, TypeVar, Union, get_args, get_origin

from pydantic import BaseModel, ConfigDict, ValidationError

from ..codec.core import decode, encode
from ..codec.schema import Schema
from ..codec.types import WireType
from ..exceptions import DecodeError, EncodeError, SchemaError
from .fields import wire_marker

M = TypeVar("M", bound="BaseMessage")

# Plain annotations without a Wire marker.
_DEFAULT_WIRE_TYPES: dict[type, WireType] = {
    bool: WireType.BOOL,
    int: WireType.INT32,
    float: WireType.FLOAT,
    bytes: WireType.BINARY,
}


class BaseMessage(BaseModel):
    """Base class for elopack messages.

    Example:
        >>> from elopack.models import Binary, UInt8, UInt16
        >>> class Tagged(BaseMessage):
        ...     id: UInt16
        ...     name: Binary
        ...     tags: list[UInt8]
        >>> data = encode_message(Tagged(id=7, name=b"ABC", tags=[1, 2, 3]))
        >>> decode_message(Tagged, data).tags
        [1, 2, 3]

    Attributes:
        elo_max_bytes: Maximum package size in bytes (optional, checked on encode)
    """

    model_config = ConfigDict(
        strict=False,
        validate_assignment=True,
        extra="forbid",
    )

    elo_max_bytes: ClassVar[Optional[int]] = None
    _elo_compiled: ClassVar[Optional[Schema]] = None

    @classmethod
    def elo_schema(cls) -> Schema:
        """Return the compiled schema derived from this model's fields.

        Raises:
            SchemaError: If a field type has no wire representation
        """
        # Looked up in the class's own namespace so subclasses never reuse a parent's schema.
        schema = cls.__dict__.get("_elo_compiled")
        if schema is None:
            schema = _schema_for(cls)
            cls._elo_compiled = schema
        return schema


def _schema_for(message_class: type[BaseMessage]) -> Schema:
    raw: dict[str, Any] = {}
    for name, field_info in message_class.model_fields.items():
        path = f"{message_class.__name__}.{name}"
        raw[name] = _descriptor(field_info.annotation, field_info.metadata, path)
    return Schema.compile(raw, name=message_class.__name__)


def _descriptor(annotation: Any, metadata: List[Any], path: str) -> Any:
    marker = wire_marker(metadata)
    if marker is not None:
        return marker.wire_type

    origin = get_origin(annotation)
    if origin is Annotated:
        inner, *extra = get_args(annotation)
        return _descriptor(inner, extra, path)

    if origin is list:
        args = get_args(annotation)
        if not args:
            raise SchemaError(f"Field {path}: list fields need an element type")
        element = _descriptor(args[0], [], path)
        if isinstance(element, list):
            raise SchemaError(f"Field {path}: nested lists are not supported")
        return [element]

    if origin is Union:
        raise SchemaError(f"Field {path}: optional and union fields are not supported")

    if isinstance(annotation, type):
        if issubclass(annotation, BaseMessage):
            return annotation.elo_schema()
        if annotation in _DEFAULT_WIRE_TYPES:
            return _DEFAULT_WIRE_TYPES[annotation]

    raise SchemaError(f"Field {path}: unsupported type {annotation!r}")


def encode_message(message: BaseMessage) -> bytes:
    """Encode a message instance into a sealed package.

    Raises:
        EncodeError: If a field value cannot be encoded or the package
            exceeds ``elo_max_bytes``
    """
    message_class = type(message)
    data = encode(message_class.elo_schema(), message)

    max_bytes = message_class.elo_max_bytes
    if max_bytes is not None and len(data) > max_bytes:
        raise EncodeError(
            f"Encoded message size ({len(data)} bytes) exceeds elo_max_bytes={max_bytes}"
        )
    return data


def decode_message(message_class: type[M], data: bytes) -> M:
    """Decode a sealed package into an instance of ``message_class``.

    Raises:
        IntegrityError: If the package is corrupted or truncated
        DecodeError: If the decoded values fail the model's validation
    """
    values = decode(message_class.elo_schema(), data)
    try:
        return message_class.model_validate(values)
    except ValidationError as e:
        raise DecodeError(f"Failed to construct {message_class.__name__}: {e}") from e
