"""Unit tests for the ordered tuple codec."""

import pytest

from src.ct_common.codec import TupleDecodeError, decode_tuple, encode_tuple, from_hex, to_hex

SCHEMA = (int, int, str)


class TestEncode:
    def test_compact_json_array(self) -> None:
        assert encode_tuple([1, 6000, "trap"]) == b'[1,6000,"trap"]'

    def test_large_integers_are_exact(self) -> None:
        big = 2**256 - 1
        assert decode_tuple(encode_tuple([big, 0, "x"]), SCHEMA)[0] == big

    def test_rejects_bool(self) -> None:
        with pytest.raises(TypeError):
            encode_tuple([True, 1, "x"])

    def test_rejects_float(self) -> None:
        with pytest.raises(TypeError):
            encode_tuple([1.5, 1, "x"])


class TestDecode:
    def test_wrong_arity(self) -> None:
        with pytest.raises(TupleDecodeError, match="Expected 3 fields"):
            decode_tuple(b"[1,2]", SCHEMA)

    def test_wrong_type(self) -> None:
        with pytest.raises(TupleDecodeError, match="Field 2"):
            decode_tuple(b"[1,2,3]", SCHEMA)

    def test_bool_is_not_an_int(self) -> None:
        with pytest.raises(TupleDecodeError):
            decode_tuple(b'[true,2,"x"]', SCHEMA)

    def test_not_json(self) -> None:
        with pytest.raises(TupleDecodeError):
            decode_tuple(b"\xff\x00", SCHEMA)

    def test_not_an_array(self) -> None:
        with pytest.raises(TupleDecodeError, match="Expected array"):
            decode_tuple(b'{"a":1}', SCHEMA)


class TestHex:
    def test_hex_round_trip(self) -> None:
        assert from_hex(to_hex(b"[1]")) == b"[1]"

    def test_missing_prefix(self) -> None:
        with pytest.raises(TupleDecodeError):
            from_hex("5b315d")

    def test_bad_digits(self) -> None:
        with pytest.raises(TupleDecodeError):
            from_hex("0xzz")
