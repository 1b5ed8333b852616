"""Ordered tuple encoding shared with the host network's generic decoder.

A tuple is encoded as a compact JSON array (UTF-8 bytes). Over HTTP the bytes
travel as a 0x-prefixed hex string, mirroring a `bytes` argument.

    encode_tuple([1, 6000, 1700000000, "0xabc...", "trap"])
      -> b'[1,6000,1700000000,"0xabc...","trap"]'

Only int and str fields exist on the wire. bool is rejected even though it is
an int subclass, so a stray flag can never pass for a price.
"""

import json
from collections.abc import Sequence

WireValue = int | str


class TupleDecodeError(ValueError):
    """Raised when bytes do not decode to a tuple of the expected shape."""


def encode_tuple(values: Sequence[WireValue]) -> bytes:
    for v in values:
        if isinstance(v, bool) or not isinstance(v, (int, str)):
            raise TypeError(f"Unsupported wire value: {v!r}")
    return json.dumps(list(values), separators=(",", ":")).encode("utf-8")


def decode_tuple(data: bytes, schema: Sequence[type]) -> tuple[WireValue, ...]:
    """Decode bytes and check arity and per-field type against schema."""
    try:
        raw = json.loads(data.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise TupleDecodeError(f"Not a tuple encoding: {e}") from e
    if not isinstance(raw, list):
        raise TupleDecodeError(f"Expected array, got {type(raw).__name__}")
    if len(raw) != len(schema):
        raise TupleDecodeError(f"Expected {len(schema)} fields, got {len(raw)}")
    for i, (value, expected) in enumerate(zip(raw, schema)):
        if isinstance(value, bool) or not isinstance(value, expected):
            raise TupleDecodeError(
                f"Field {i}: expected {expected.__name__}, got {type(value).__name__}"
            )
    return tuple(raw)


def to_hex(data: bytes) -> str:
    return "0x" + data.hex()


def from_hex(value: str) -> bytes:
    """Parse a 0x-prefixed hex string into bytes."""
    if not value.startswith("0x"):
        raise TupleDecodeError("Hex payload must start with 0x")
    try:
        return bytes.fromhex(value[2:])
    except ValueError as e:
        raise TupleDecodeError(f"Invalid hex payload: {e}") from e
