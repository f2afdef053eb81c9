"""Schema compilation.

A schema is declared as an ordered mapping from field name to a descriptor:

- a wire type tag (``"uint16"`` or ``WireType.UINT16``)
- a nested mapping (a record field)
- a one-element list wrapping either of the above (a repeated field)

This module validates such declarations once and turns them into immutable
``Schema`` objects that the encoder and decoder walk.
"""

from __future__ import annotations

import enum
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from functools import cached_property
from typing import Annotated, Any, Iterator, List, Optional, Tuple, Type, Union

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    StrictBool,
    StrictFloat,
    StrictInt,
    create_model,
)

from ..exceptions import SchemaError
from .types import MAX_LENGTH, WireType

RawSchema = Mapping[str, Any]


class FieldKind(enum.Enum):
    """Structural kind of a schema field."""

    PRIMITIVE = "primitive"
    RECORD = "record"
    LIST = "list"


@dataclass(frozen=True)
class FieldSchema:
    """Schema information for a single field.

    Attributes:
        name: Field name
        kind: Primitive, nested record, or homogeneous list
        wire_type: Wire type of a primitive field or of primitive list elements
        schema: Nested schema of a record field or of record list elements
    """

    name: str
    kind: FieldKind
    wire_type: Optional[WireType] = None
    schema: Optional[Schema] = None

    @property
    def is_list(self) -> bool:
        return self.kind is FieldKind.LIST

    def fixed_size(self) -> Optional[int]:
        """Return the encoded width of this field, or None if it varies with the value."""
        if self.kind is FieldKind.LIST:
            return None
        if self.schema is not None:
            return self.schema.fixed_size()
        assert self.wire_type is not None
        if self.wire_type is WireType.BINARY:
            return None
        return self.wire_type.size

    def describe(self) -> str:
        """Return a short human-readable descriptor, e.g. ``[uint8]``."""
        inner = str(self.wire_type) if self.wire_type is not None else "record"
        return f"[{inner}]" if self.is_list else inner


@dataclass(frozen=True)
class Schema:
    """Compiled, validated schema of a record.

    Example:
        >>> schema = Schema.compile({"id": "uint16", "tags": ["uint8"]})
        >>> [f.name for f in schema]
        ['id', 'tags']
    """

    fields: Tuple[FieldSchema, ...]
    name: str = "Record"

    @classmethod
    def compile(cls, raw: Union[RawSchema, Schema], name: str = "Record") -> Schema:
        """Validate a schema declaration and compile it.

        Args:
            raw: Schema declaration (an already compiled Schema is returned as-is)
            name: Name used for error messages and the generated pydantic model

        Returns:
            Compiled Schema

        Raises:
            SchemaError: If the declaration is invalid
        """
        if isinstance(raw, Schema):
            return raw
        return _compile(raw, name, frozenset())

    def __iter__(self) -> Iterator[FieldSchema]:
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)

    def fixed_size(self) -> Optional[int]:
        """Return the payload size if every field has a fixed width, else None.

        The size excludes the trailing check byte of a top-level package.
        """
        total = 0
        for field_schema in self.fields:
            size = field_schema.fixed_size()
            if size is None:
                return None
            total += size
        return total

    @cached_property
    def model(self) -> Type[BaseModel]:
        """Pydantic model mirroring this schema, used for boundary validation."""
        definitions: dict[str, Any] = {}
        for index, field_schema in enumerate(self.fields):
            annotation = _annotation_for(field_schema)
            # Field names may clash with BaseModel attributes, so they travel as aliases.
            definitions[f"field_{index}"] = (annotation, Field(alias=field_schema.name))
        return create_model(  # type: ignore[call-overload,no-any-return]
            self.name,
            __config__=ConfigDict(extra="ignore", arbitrary_types_allowed=True),
            **definitions,
        )


def _compile(raw: Any, path: str, active: frozenset[int]) -> Schema:
    if not isinstance(raw, Mapping):
        raise SchemaError(f"{path}: schema must be a mapping, got {type(raw).__name__}")
    if id(raw) in active:
        raise SchemaError(f"{path}: schema contains a reference cycle")
    active = active | {id(raw)}

    fields: List[FieldSchema] = []
    for name, descriptor in raw.items():
        if not isinstance(name, str):
            raise SchemaError(f"{path}: field names must be strings, got {name!r}")
        fields.append(_compile_field(name, descriptor, f"{path}.{name}", active))
    return Schema(fields=tuple(fields), name=path.rsplit(".", 1)[-1])


def _compile_field(name: str, descriptor: Any, path: str, active: frozenset[int]) -> FieldSchema:
    if isinstance(descriptor, (str, WireType)):
        return FieldSchema(name=name, kind=FieldKind.PRIMITIVE, wire_type=_parse(descriptor, path))

    if isinstance(descriptor, (Mapping, Schema)):
        return FieldSchema(name=name, kind=FieldKind.RECORD, schema=_nested(descriptor, path, active))

    if isinstance(descriptor, (list, tuple)):
        if len(descriptor) != 1:
            raise SchemaError(
                f"{path}: list descriptor must wrap exactly one element type, "
                f"got {len(descriptor)}"
            )
        element = descriptor[0]
        if element is None or (isinstance(element, str) and not element):
            raise SchemaError(f"{path}: list descriptor has no element type")
        if isinstance(element, (str, WireType)):
            return FieldSchema(name=name, kind=FieldKind.LIST, wire_type=_parse(element, path))
        if isinstance(element, (Mapping, Schema)):
            return FieldSchema(name=name, kind=FieldKind.LIST, schema=_nested(element, path, active))
        if isinstance(element, (list, tuple)):
            raise SchemaError(f"{path}: nested lists are not supported")
        raise SchemaError(f"{path}: invalid list element descriptor {element!r}")

    raise SchemaError(f"{path}: invalid field descriptor {descriptor!r}")


def _nested(descriptor: Any, path: str, active: frozenset[int]) -> Schema:
    if isinstance(descriptor, Schema):
        return descriptor
    return _compile(descriptor, path, active)


def _parse(tag: Any, path: str) -> WireType:
    try:
        return WireType.parse(tag)
    except SchemaError as e:
        raise SchemaError(f"{path}: {e}") from e


# Binary and list fields accept exactly what the encoder accepts.
def _bytes_like(value: Any) -> Any:
    if not isinstance(value, (bytes, bytearray, memoryview)):
        raise ValueError(f"expected bytes-like, got {type(value).__name__}")
    return bytes(value)


def _sequence(value: Any) -> Any:
    if isinstance(value, (str, bytes, bytearray, memoryview, Mapping)) or not isinstance(
        value, Sequence
    ):
        raise ValueError(f"expected a list, got {type(value).__name__}")
    return list(value)


def _primitive_annotation(wire_type: WireType) -> Any:
    if wire_type.is_integer:
        return Annotated[StrictInt, Field(ge=wire_type.min_value, le=wire_type.max_value)]
    if wire_type is WireType.FLOAT:
        return Union[StrictFloat, StrictInt]
    if wire_type is WireType.BOOL:
        return StrictBool
    return Annotated[bytes, Field(max_length=MAX_LENGTH), BeforeValidator(_bytes_like)]


def _annotation_for(field_schema: FieldSchema) -> Any:
    if field_schema.schema is not None:
        element: Any = field_schema.schema.model
    else:
        assert field_schema.wire_type is not None
        element = _primitive_annotation(field_schema.wire_type)

    if field_schema.is_list:
        return Annotated[
            List[element],  # type: ignore[valid-type]
            Field(max_length=MAX_LENGTH),
            BeforeValidator(_sequence),
        ]
    return element
