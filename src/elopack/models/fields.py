"""Field type helpers.

This module provides ``Annotated`` aliases that pin a pydantic field to a wire
type, together with the matching range constraints:

    >>> class Reading(BaseMessage):
    ...     sensor_id: UInt16
    ...     temperature: Float32
    ...     samples: list[Int16]
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated, Any, Iterable, Optional

from pydantic import Field

from ..codec.types import MAX_LENGTH, WireType


@dataclass(frozen=True)
class Wire:
    """Annotation marker selecting the wire type of a field."""

    wire_type: WireType


def wire_marker(metadata: Iterable[Any]) -> Optional[Wire]:
    """Return the Wire marker among a field's metadata, if any."""
    for item in metadata:
        if isinstance(item, Wire):
            return item
    return None


def _int(wire_type: WireType) -> Any:
    return Annotated[int, Field(ge=wire_type.min_value, le=wire_type.max_value), Wire(wire_type)]


Int8 = _int(WireType.INT8)
Int16 = _int(WireType.INT16)
Int32 = _int(WireType.INT32)
UInt8 = _int(WireType.UINT8)
UInt16 = _int(WireType.UINT16)
UInt32 = _int(WireType.UINT32)
Float32 = Annotated[float, Wire(WireType.FLOAT)]
Bool = Annotated[bool, Wire(WireType.BOOL)]
Binary = Annotated[bytes, Field(max_length=MAX_LENGTH), Wire(WireType.BINARY)]
