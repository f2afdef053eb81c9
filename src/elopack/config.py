"""Configuration for the elopack codec.

This module provides the configuration dataclass consumed by ``Codec``.
"""

from __future__ import annotations

from dataclasses import dataclass

from .codec.cursor import DEFAULT_CAPACITY


@dataclass
class CodecConfig:
    """Configuration for a ``Codec`` instance.

    Attributes:
        scratch_capacity: Size in bytes of the reusable scratch buffer used for
            encoding (default 102400). Encoding a payload larger than this
            raises BoundsError.

        validate_values: Validate each value against the schema's pydantic
            model before encoding (default False). Validation failures are
            reported as EncodeError.

        strict_length: Reject packages that still hold unread bytes after
            every field has been decoded (default True).

    Examples:
        ```python
        from elopack import Codec, CodecConfig

        codec = Codec(CodecConfig(scratch_capacity=1024, validate_values=True))
        data = codec.encode({"id": "uint16"}, {"id": 7})
        ```
    """

    scratch_capacity: int = DEFAULT_CAPACITY
    validate_values: bool = False
    strict_length: bool = True

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if self.scratch_capacity < 1:
            raise ValueError(f"scratch_capacity must be positive, got {self.scratch_capacity}")
