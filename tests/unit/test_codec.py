"""Unit tests for encoding/decoding."""

from __future__ import annotations

from typing import Any

import pytest

from elopack import (
    BoundsError,
    ChecksumMismatchError,
    Codec,
    CodecConfig,
    DecodeError,
    EncodeError,
    IntegrityError,
    PackageLengthError,
    Schema,
    SchemaError,
    decode,
    encode,
    validate,
)


class TestEncodeDecode:
    """Test basic encode/decode functionality."""

    def test_concrete_package(self, tagged_schema: dict[str, Any], tagged_value: dict[str, Any]) -> None:
        """Test the exact bytes of a known package."""
        data = encode(tagged_schema, tagged_value)

        assert data == bytes.fromhex("0d150f13525456141817191bd9")
        assert decode(tagged_schema, data) == tagged_value

    def test_returns_bytes(self, tagged_schema: dict[str, Any], tagged_value: dict[str, Any]) -> None:
        """Test encode returns immutable bytes."""
        assert isinstance(encode(tagged_schema, tagged_value), bytes)

    def test_all_primitives(self) -> None:
        """Test every wire type at its limits."""
        schema = {
            "i8": "int8",
            "i16": "int16",
            "i32": "int32",
            "u8": "uint8",
            "u16": "uint16",
            "u32": "uint32",
            "f": "float",
            "b": "bool",
            "raw": "binary",
        }
        value = {
            "i8": -128,
            "i16": 32767,
            "i32": -(2**31),
            "u8": 255,
            "u16": 0,
            "u32": 2**32 - 1,
            "f": -2.5,
            "b": False,
            "raw": bytes(range(256)),
        }
        data = encode(schema, value)

        assert len(data) == 1 + 2 + 4 + 1 + 2 + 4 + 4 + 1 + (2 + 256) + 1
        assert decode(schema, data) == value

    def test_nested_depth(self, fleet_schema: dict[str, Any], fleet_value: dict[str, Any]) -> None:
        """Test records inside lists inside records."""
        data = encode(fleet_schema, fleet_value)
        assert decode(fleet_schema, data) == fleet_value

    def test_empty_list(self) -> None:
        """Test an empty list encodes as a zero count only."""
        schema = {"before": "uint8", "items": [{"x": "uint32"}], "after": "uint8"}
        value = {"before": 1, "items": [], "after": 2}
        data = encode(schema, value)

        # 1 + 2 (count) + 1 + check byte
        assert len(data) == 5
        assert decode(schema, data) == value

    def test_field_order_is_declaration_order(self) -> None:
        """Test fields are written in schema order, not value order."""
        schema = {"b": "uint8", "a": "uint8"}
        data = encode(schema, {"a": 1, "b": 2})

        assert decode({"first": "uint8", "second": "uint8"}, data) == {"first": 2, "second": 1}

    def test_empty_schema(self) -> None:
        """Test a package with no fields is just the check byte."""
        assert encode({}, {}) == b"\x00"
        assert decode({}, b"\x00") == {}

    def test_compiled_schema(self, tagged_schema: dict[str, Any], tagged_value: dict[str, Any]) -> None:
        """Test compiled schemas are accepted."""
        schema = Schema.compile(tagged_schema)
        assert decode(schema, encode(schema, tagged_value)) == tagged_value

    def test_tuple_and_bytearray_inputs(self) -> None:
        """Test any sequence and bytes-like input is accepted."""
        schema = {"tags": ["uint8"], "raw": "binary"}
        data = encode(schema, {"tags": (4, 5), "raw": bytearray(b"xy")})

        assert decode(schema, bytearray(data)) == {"tags": [4, 5], "raw": b"xy"}
        assert decode(schema, memoryview(data)) == {"tags": [4, 5], "raw": b"xy"}

    def test_extra_value_keys_ignored(self) -> None:
        """Test keys not in the schema are not encoded."""
        data = encode({"a": "uint8"}, {"a": 1, "unused": "x"})
        assert decode({"a": "uint8"}, data) == {"a": 1}

    def test_decode_does_not_mutate_input(self, tagged_schema: dict[str, Any], tagged_value: dict[str, Any]) -> None:
        """Test decode works on a copy of the input."""
        data = bytearray(encode(tagged_schema, tagged_value))
        original = bytes(data)
        decode(tagged_schema, data)

        assert bytes(data) == original


class TestEncodeErrors:
    """Test encoding error handling."""

    def test_missing_field(self) -> None:
        """Test a missing field names its path."""
        with pytest.raises(EncodeError, match="inner.b: missing"):
            encode({"inner": {"a": "uint8", "b": "uint8"}}, {"inner": {"a": 1}})

    def test_value_out_of_bounds(self) -> None:
        """Test integers outside the wire range."""
        with pytest.raises(EncodeError, match="out of bounds"):
            encode({"id": "uint8"}, {"id": 256})
        with pytest.raises(EncodeError, match="out of bounds"):
            encode({"id": "int16"}, {"id": -32769})

    def test_wrong_primitive_type(self) -> None:
        """Test primitive type mismatches."""
        with pytest.raises(EncodeError, match="expected int"):
            encode({"id": "uint16"}, {"id": "7"})
        with pytest.raises(EncodeError, match="expected int"):
            encode({"id": "uint16"}, {"id": True})
        with pytest.raises(EncodeError, match="expected bool"):
            encode({"flag": "bool"}, {"flag": 1})
        with pytest.raises(EncodeError, match="expected float"):
            encode({"x": "float"}, {"x": "1.0"})
        with pytest.raises(EncodeError, match="bytes-like"):
            encode({"raw": "binary"}, {"raw": "text"})

    def test_list_expected(self) -> None:
        """Test list fields reject strings and scalars."""
        with pytest.raises(EncodeError, match="expected a list"):
            encode({"tags": ["uint8"]}, {"tags": b"\x01\x02"})
        with pytest.raises(EncodeError, match="expected a list"):
            encode({"tags": ["uint8"]}, {"tags": 3})

    def test_record_expected(self) -> None:
        """Test record fields reject non-mappings."""
        with pytest.raises(EncodeError, match="expected a mapping"):
            encode({"inner": {"a": "uint8"}}, {"inner": [1]})

    def test_error_path_in_list(self) -> None:
        """Test errors inside list elements report the element index."""
        schema = {"ships": [{"id": "uint16"}]}

        with pytest.raises(EncodeError, match=r"ships\[1\]\.id"):
            encode(schema, {"ships": [{"id": 1}, {"id": -1}]})

    def test_list_too_long(self) -> None:
        """Test list counts must fit in uint16."""
        with pytest.raises(EncodeError, match="exceeds 65535"):
            encode({"flags": ["bool"]}, {"flags": [True] * 65536})

    def test_invalid_schema(self) -> None:
        """Test typeless lists are schema errors, not silently skipped."""
        with pytest.raises(SchemaError):
            encode({"tags": [None]}, {"tags": []})
        with pytest.raises(SchemaError):
            decode({"tags": []}, b"\x00")

    def test_exceeds_scratch_capacity(self) -> None:
        """Test bounds errors propagate from the writer."""
        codec = Codec(CodecConfig(scratch_capacity=4))

        with pytest.raises(BoundsError):
            codec.encode({"raw": "binary"}, {"raw": b"abcdef"})

        # The scratch writer is usable again after the failure
        assert codec.encode({"a": "uint8"}, {"a": 1}) == encode({"a": "uint8"}, {"a": 1})


class TestDecodeErrors:
    """Test decoding error handling."""

    def test_single_bit_flip(self, tagged_schema: dict[str, Any], tagged_value: dict[str, Any]) -> None:
        """Test corruption anywhere in the package is detected."""
        data = encode(tagged_schema, tagged_value)

        for index in range(len(data)):
            corrupted = bytearray(data)
            corrupted[index] ^= 0x04
            with pytest.raises(ChecksumMismatchError):
                decode(tagged_schema, bytes(corrupted))

    def test_truncated_tail(self, tagged_schema: dict[str, Any], tagged_value: dict[str, Any]) -> None:
        """Test removing the trailing byte."""
        data = encode(tagged_schema, tagged_value)

        with pytest.raises((IntegrityError, BoundsError)):
            decode(tagged_schema, data[:-1])

    def test_truncated_head(self, tagged_schema: dict[str, Any], tagged_value: dict[str, Any]) -> None:
        """Test removing a leading byte."""
        data = encode(tagged_schema, tagged_value)

        with pytest.raises((IntegrityError, BoundsError)):
            decode(tagged_schema, data[1:])

    def test_fixed_layout_length_mismatch(self) -> None:
        """Test fixed-layout packages of the wrong size are length errors."""
        schema = {"a": "uint32", "b": "int16"}
        data = encode(schema, {"a": 1, "b": 2})
        assert len(data) == 7

        with pytest.raises(PackageLengthError, match="7 bytes, got 6"):
            decode(schema, data[:-1])
        with pytest.raises(PackageLengthError):
            decode(schema, data + b"\x00")

    def test_empty_input(self) -> None:
        """Test empty input is a length error."""
        with pytest.raises(PackageLengthError):
            decode({"tags": ["uint8"]}, b"")

    def test_not_bytes(self) -> None:
        """Test non bytes-like input."""
        with pytest.raises(DecodeError, match="bytes-like"):
            decode({"a": "uint8"}, 5)  # type: ignore[arg-type]

    def test_unread_bytes(self) -> None:
        """Test bytes left over after the last field."""
        data = encode({"tags": ["uint8"], "extra": "uint8"}, {"tags": [1], "extra": 9})

        with pytest.raises(PackageLengthError, match="1 bytes left"):
            decode({"tags": ["uint8"]}, data)

    def test_unread_bytes_tolerated(self) -> None:
        """Test strict_length can be disabled."""
        data = encode({"tags": ["uint8"], "extra": "uint8"}, {"tags": [1], "extra": 9})
        codec = Codec(CodecConfig(strict_length=False))

        assert codec.decode({"tags": ["uint8"]}, data) == {"tags": [1]}

    def test_payload_shorter_than_schema(self) -> None:
        """Test a valid package decoded with a larger schema."""
        data = encode({"tags": ["uint8"]}, {"tags": []})

        with pytest.raises(BoundsError):
            decode({"tags": ["uint8"], "x": "uint32"}, data)

    def test_integrity_errors_are_decode_errors(self) -> None:
        """Test the exception hierarchy."""
        assert issubclass(ChecksumMismatchError, IntegrityError)
        assert issubclass(PackageLengthError, IntegrityError)
        assert issubclass(IntegrityError, DecodeError)


class TestScratchReuse:
    """Test the reusable scratch buffer never leaks between encodes."""

    def test_no_leak_between_encodes(self) -> None:
        """Test a short encode after a long one."""
        codec = Codec()
        codec.encode({"raw": "binary"}, {"raw": b"\xaa" * 64})
        short = codec.encode({"a": "uint8", "b": "uint8"}, {"a": 1, "b": 2})

        assert short == Codec().encode({"a": "uint8", "b": "uint8"}, {"a": 1, "b": 2})
        assert len(short) == 3

    def test_results_independent_of_history(self, tagged_schema: dict[str, Any], tagged_value: dict[str, Any]) -> None:
        """Test the same value always encodes the same."""
        first = encode(tagged_schema, tagged_value)
        encode({"raw": "binary"}, {"raw": b"\xff" * 1000})
        assert encode(tagged_schema, tagged_value) == first


class TestValidation:
    """Test pydantic boundary validation."""

    def test_validate_ok(self, fleet_schema: dict[str, Any], fleet_value: dict[str, Any]) -> None:
        """Test a matching value validates."""
        validate(fleet_schema, fleet_value)

    def test_validate_failure(self) -> None:
        """Test validation failures are encode errors."""
        with pytest.raises(EncodeError, match="does not match"):
            validate({"id": "uint16"}, {"id": 70000})

    def test_codec_validates_before_encoding(self) -> None:
        """Test validate_values runs before any bytes are written."""
        codec = Codec(CodecConfig(validate_values=True))

        with pytest.raises(EncodeError, match="does not match"):
            codec.encode({"inner": {"flag": "bool"}}, {"inner": {"flag": "yes"}})
        assert codec.encode({"inner": {"flag": "bool"}}, {"inner": {"flag": True}})

    @pytest.mark.parametrize(
        ("schema", "value"),
        [
            ({"raw": "binary"}, {"raw": "text"}),
            ({"tags": ["uint8"]}, {"tags": {1, 2}}),
            ({"tags": ["uint8"]}, {"tags": "ab"}),
            ({"tags": ["uint8"]}, {"tags": b"\x01\x02"}),
            ({"points": [{"x": "int8"}]}, {"points": {"x": 1}}),
        ],
    )
    def test_validate_rejects_what_encode_rejects(self, schema: dict[str, Any], value: dict[str, Any]) -> None:
        """Test values the encoder refuses also fail validation."""
        with pytest.raises(EncodeError):
            encode(schema, value)
        with pytest.raises(EncodeError, match="does not match"):
            validate(schema, value)

    @pytest.mark.parametrize(
        ("schema", "value"),
        [
            ({"raw": "binary"}, {"raw": memoryview(b"ab")}),
            ({"raw": "binary"}, {"raw": bytearray(b"ab")}),
            ({"tags": ["uint8"]}, {"tags": (1, 2)}),
            ({"points": [{"x": "int8"}]}, {"points": ({"x": 1}, {"x": -1})}),
        ],
    )
    def test_validate_accepts_what_encode_accepts(self, schema: dict[str, Any], value: dict[str, Any]) -> None:
        """Test bytes-like and tuple values pass validation and encoding alike."""
        validate(schema, value)
        plain = encode(schema, value)

        assert Codec(CodecConfig(validate_values=True)).encode(schema, value) == plain

    def test_config_rejects_bad_capacity(self) -> None:
        """Test configuration validation."""
        with pytest.raises(ValueError, match="scratch_capacity"):
            CodecConfig(scratch_capacity=0)
