"""Package integrity transform.

Every top-level package carries one trailing check byte: the modulo-256 sum of
all payload bytes. The payload itself is additionally obfuscated with a
transform keyed by the total package length and each byte's position, so a
truncated package de-obfuscates to different bytes and fails the check.

This detects accidental corruption only; it is not an authentication scheme.
"""

from __future__ import annotations

import logging
from typing import Union

from ..exceptions import ChecksumMismatchError, PackageLengthError

logger = logging.getLogger(__name__)


def checksum(payload: Union[bytes, bytearray, memoryview]) -> int:
    """Return the modulo-256 sum of a payload.

    Args:
        payload: Bytes to sum

    Returns:
        Checksum in the range 0-255
    """
    return sum(payload) & 0xFF


def seal(package: bytearray) -> None:
    """Apply the integrity transform in place.

    The last byte of ``package`` is a placeholder reserved for the check byte.
    Every other byte i is replaced with ``(byte + N + i) mod 256`` where N is
    the package length, and the placeholder receives the checksum of the
    original bytes.

    Args:
        package: Encoded payload followed by one placeholder byte

    Raises:
        PackageLengthError: If the package has no room for the check byte
    """
    length = len(package)
    if length < 1:
        raise PackageLengthError("Cannot seal an empty package")

    total = 0
    for i in range(length - 1):
        byte = package[i]
        total += byte
        package[i] = (byte + length + i) & 0xFF

    package[length - 1] = total & 0xFF


def unseal(package: bytearray) -> None:
    """Reverse the integrity transform in place and verify the check byte.

    Args:
        package: Sealed package as received

    Raises:
        PackageLengthError: If the package is empty
        ChecksumMismatchError: If the restored payload does not match the check byte
    """
    length = len(package)
    if length < 1:
        logger.warning("Rejected empty package")
        raise PackageLengthError("Invalid package: no check byte")

    total = 0
    for i in range(length - 1):
        restored = (package[i] - length - i) & 0xFF
        package[i] = restored
        total += restored

    expected = package[length - 1]
    if total & 0xFF != expected:
        logger.warning("Checksum mismatch on %d byte package", length)
        raise ChecksumMismatchError(expected=expected, actual=total & 0xFF)
