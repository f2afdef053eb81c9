"""Top-level encode and decode.

``Codec`` is the only place where a package is sealed or unsealed: the
schema encoder and decoder below it only ever see raw payload bytes. Each
top-level call owns its cursor exclusively; nested records share it.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Union

from pydantic import BaseModel, ValidationError

from ..config import CodecConfig
from ..exceptions import DecodeError, EncodeError, PackageLengthError
from .cursor import BufferReader
from .decoder import decode_record
from .encoder import encode_record
from .integrity import seal, unseal
from .pool import WriterPool
from .schema import RawSchema, Schema
from .types import WireType

logger = logging.getLogger(__name__)

SchemaLike = Union[RawSchema, Schema]

# Placeholder written after the last field; overwritten by the checksum on seal.
CHECK_BYTE = WireType.UINT8


class Codec:
    """Encodes and decodes records against schemas.

    A codec keeps one reusable scratch buffer for encoding. It is safe to share
    between threads: concurrent or re-entrant encodes that find the scratch
    buffer busy allocate their own.

    Example:
        >>> codec = Codec()
        >>> schema = {"id": "uint16", "name": "binary", "tags": ["uint8"]}
        >>> data = codec.encode(schema, {"id": 7, "name": b"ABC", "tags": [1, 2, 3]})
        >>> codec.decode(schema, data)
        {'id': 7, 'name': b'ABC', 'tags': [1, 2, 3]}
    """

    def __init__(self, config: Optional[CodecConfig] = None) -> None:
        self.config = config or CodecConfig()
        self._pool = WriterPool(self.config.scratch_capacity)

    def encode(self, schema: SchemaLike, value: Any) -> bytes:
        """Encode a value into a sealed package.

        Args:
            schema: Schema declaration or compiled Schema
            value: Mapping (or pydantic model) matching the schema's shape

        Returns:
            Package bytes: the encoded fields followed by one check byte

        Raises:
            SchemaError: If the schema is invalid
            EncodeError: If the value does not match the schema
            BoundsError: If the package exceeds the scratch capacity
        """
        compiled = Schema.compile(schema)
        if self.config.validate_values:
            self.validate(compiled, value)

        with self._pool.checkout() as writer:
            encode_record(compiled, value, writer)
            writer.write(CHECK_BYTE, 0)
            package = writer.finalize()

        seal(package)
        logger.debug("Encoded %s into %d byte package", compiled.name, len(package))
        return bytes(package)

    def decode(self, schema: SchemaLike, data: Union[bytes, bytearray, memoryview]) -> dict[str, Any]:
        """Verify a sealed package and decode it.

        The input is never modified.

        Args:
            schema: The same schema the package was encoded with
            data: Package bytes

        Returns:
            Decoded record as a dict

        Raises:
            SchemaError: If the schema is invalid
            ChecksumMismatchError: If the package is corrupted
            PackageLengthError: If the package length disagrees with the schema
            BoundsError: If the payload ends before the record is complete
        """
        compiled = Schema.compile(schema)
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise DecodeError(f"Expected bytes-like data, got {type(data).__name__}")

        package = bytearray(data)
        if not package:
            logger.warning("Rejected empty package for %s", compiled.name)
            raise PackageLengthError("Invalid package: no check byte")

        fixed_size = compiled.fixed_size()
        if fixed_size is not None and len(package) != fixed_size + 1:
            logger.warning(
                "Package for %s is %d bytes, expected %d", compiled.name, len(package), fixed_size + 1
            )
            raise PackageLengthError(
                f"Invalid package: {compiled.name} packages are {fixed_size + 1} bytes, "
                f"got {len(package)}"
            )

        unseal(package)
        del package[-1]

        reader = BufferReader(package)
        result = decode_record(compiled, reader)

        if self.config.strict_length and reader.remaining():
            logger.warning("%d unread bytes after decoding %s", reader.remaining(), compiled.name)
            raise PackageLengthError(
                f"Invalid package: {reader.remaining()} bytes left after decoding {compiled.name}"
            )

        logger.debug("Decoded %s from %d byte package", compiled.name, len(package) + 1)
        return result

    def validate(self, schema: SchemaLike, value: Any) -> None:
        """Validate a value against the schema's pydantic model.

        Raises:
            EncodeError: If the value does not match the schema
        """
        compiled = Schema.compile(schema)
        if isinstance(value, BaseModel):
            value = value.model_dump()
        try:
            compiled.model.model_validate(value)
        except ValidationError as e:
            raise EncodeError(f"Value does not match {compiled.name}: {e}") from e


_default_codec = Codec()


def encode(schema: SchemaLike, value: Any) -> bytes:
    """Encode a value into a sealed package.

    Fields are encoded in schema declaration order, big-endian, followed by a
    single check byte. The whole payload is obfuscated with a length- and
    position-keyed transform so corruption and truncation are detected.

    Args:
        schema: Schema declaration, e.g. ``{"id": "uint16", "tags": ["uint8"]}``
        value: Mapping whose shape matches the schema

    Returns:
        Package bytes

    Raises:
        SchemaError: If the schema is invalid
        EncodeError: If the value does not match the schema

    Examples:
        ```python
        from elopack import encode, decode

        schema = {"id": "uint16", "name": "binary", "tags": ["uint8"]}
        data = encode(schema, {"id": 7, "name": b"ABC", "tags": [1, 2, 3]})
        assert decode(schema, data)["tags"] == [1, 2, 3]
        ```
    """
    return _default_codec.encode(schema, value)


def decode(schema: SchemaLike, data: Union[bytes, bytearray, memoryview]) -> dict[str, Any]:
    """Verify and decode a package produced by ``encode``.

    Args:
        schema: The schema the package was encoded with
        data: Package bytes

    Returns:
        Decoded record as a dict

    Raises:
        IntegrityError: If the package is corrupted or truncated
        BoundsError: If the payload is shorter than the schema requires
    """
    return _default_codec.decode(schema, data)


def validate(schema: SchemaLike, value: Any) -> None:
    """Validate a value against a schema without encoding it.

    Raises:
        EncodeError: If the value does not match the schema
    """
    _default_codec.validate(schema, value)
