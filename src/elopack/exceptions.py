"""Exception hierarchy for elopack.

This module defines all custom exceptions used throughout the package.
All exceptions inherit from ElopackError for easy catching of any elopack-specific error.
"""

from __future__ import annotations


class ElopackError(Exception):
    """Base exception for all elopack errors."""

    pass


class SchemaError(ElopackError):
    """Raised when a schema declaration is invalid.

    Examples:
        - Unknown wire type tag
        - List descriptor with no element type (``[]`` or ``[None]``)
        - List descriptor wrapping more than one element type
        - Nested lists
    """

    pass


class EncodeError(ElopackError):
    """Raised when encoding a value fails.

    Examples:
        - Missing field in the value
        - Field of the wrong kind (mapping expected, sequence expected, ...)
        - Integer out of range for its wire type
        - Binary or list longer than 65535 entries
    """

    pass


class DecodeError(ElopackError):
    """Raised when decoding binary data fails."""

    pass


class IntegrityError(DecodeError):
    """Raised when a package fails its integrity check.

    Signals corrupted or truncated input. No partial value is produced.
    """

    pass


class ChecksumMismatchError(IntegrityError):
    """Raised when the trailing check byte does not match the payload."""

    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(
            f"Invalid package: checksum 0x{actual:02x} does not match check byte 0x{expected:02x}"
        )
        self.expected = expected
        self.actual = actual


class PackageLengthError(IntegrityError):
    """Raised when the package length disagrees with its framing.

    Examples:
        - Empty input
        - Fixed-layout schema decoded from a package of the wrong size
        - Bytes left over after every field has been decoded
    """

    pass


class BoundsError(ElopackError, IndexError):
    """Raised when a cursor reads or writes beyond its buffer.

    Indicates a schema/buffer size mismatch or malformed input. It is
    propagated to the caller unchanged.
    """

    pass
