"""Address-like identifiers: 0x-prefixed, 20 bytes, compared lowercase."""

import re

ZERO_ADDRESS = "0x" + "0" * 40

_ADDRESS_RE = re.compile(r"^0x[0-9a-fA-F]{40}$")


def is_address(value: str) -> bool:
    return bool(_ADDRESS_RE.match(value))


def normalize_address(value: str) -> str:
    """Lowercase a well-formed address; raise ValueError otherwise."""
    if not is_address(value):
        raise ValueError(f"Not an address: {value!r}")
    return value.lower()
