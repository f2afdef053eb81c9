"""Pydantic message modeling for elopack.

This module provides the BaseMessage class and wire-typed field aliases for
declaring schemas as pydantic models.
"""

from __future__ import annotations

from .base import BaseMessage, decode_message, encode_message
from .fields import Binary, Bool, Float32, Int8, Int16, Int32, UInt8, UInt16, UInt32, Wire

__all__ = [
    "BaseMessage",
    "encode_message",
    "decode_message",
    "Wire",
    "Int8",
    "Int16",
    "Int32",
    "UInt8",
    "UInt16",
    "UInt32",
    "Float32",
    "Bool",
    "Binary",
]
