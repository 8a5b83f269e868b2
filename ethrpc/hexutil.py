"""Hex and numeric encodings used on the JSON-RPC wire."""

from __future__ import annotations

import re
from typing import Any

U64_MAX = 2**64 - 1
U256_MAX = 2**256 - 1

_HEX_DIGITS = re.compile(r"[0-9a-fA-F]*")
_DECIMAL_DIGITS = re.compile(r"[0-9]+")


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _hex_digits(text: Any) -> str:
    """Return the hex digits of ``text`` with an optional ``0x`` prefix removed."""
    if not isinstance(text, str):
        raise ValueError(f"expected a hex string, got {type(text).__name__}")
    digits = text[2:] if text.startswith("0x") else text
    if not _HEX_DIGITS.fullmatch(digits):
        raise ValueError(f"invalid hex string: {text!r}")
    return digits


def _fixed_bytes(text: Any, size: int, what: str) -> bytes:
    digits = _hex_digits(text)
    if len(digits) != size * 2:
        raise ValueError(f"invalid {what}: expected {size} bytes, got {text!r}")
    return bytes.fromhex(digits)


def encode_quantity(value: int) -> str:
    """Encode a non-negative integer as a minimal ``0x`` hex quantity."""
    if not _is_int(value):
        raise ValueError(f"expected an integer, got {type(value).__name__}")
    if value < 0:
        raise ValueError(f"quantity must not be negative: {value}")
    return f"0x{value:x}"


def decode_quantity(text: str, bits: int = 256) -> int:
    """Decode a hex quantity string (``0x`` prefix optional) that fits in ``bits`` bits."""
    digits = _hex_digits(text)
    value = int(digits, 16) if digits else 0
    if value.bit_length() > bits:
        raise ValueError(f"quantity {text!r} does not fit in {bits} bits")
    return value


def parse_address(text: str) -> str:
    """Parse a 20-byte address and return it as lower-case ``0x`` hex."""
    return "0x" + _fixed_bytes(text, 20, "address").hex()


def parse_b256(text: str) -> bytes:
    """Parse a 32-byte hash or word."""
    return _fixed_bytes(text, 32, "32-byte value")


def encode_b256(value: bytes) -> str:
    """Encode a 32-byte value as ``0x`` hex."""
    raw = bytes(value)
    if len(raw) != 32:
        raise ValueError(f"expected 32 bytes, got {len(raw)}")
    return "0x" + raw.hex()


def parse_bytes(text: str) -> bytes:
    """Parse an arbitrary-length byte string from hex (``0x`` prefix optional)."""
    digits = _hex_digits(text)
    if len(digits) % 2:
        raise ValueError(f"odd number of hex digits: {text!r}")
    return bytes.fromhex(digits)


def encode_bytes(data: bytes) -> str:
    """Encode bytes as ``0x``-prefixed hex."""
    return "0x" + bytes(data).hex()


def hex_no_prefix(data: bytes) -> str:
    """Encode bytes as hex without the ``0x`` prefix."""
    return bytes(data).hex()


def from_int_or_hex(value: Any) -> int:
    """Accept a JSON integer or a hex string and return a 256-bit unsigned value."""
    if _is_int(value):
        if not 0 <= value <= U256_MAX:
            raise ValueError(f"number out of range for U256: {value}")
        return value
    if isinstance(value, str):
        return decode_quantity(value, 256)
    raise ValueError(f"expected an integer or hex string, got {value!r}")


def from_int_or_hex_opt(value: Any) -> int | None:
    """Like :func:`from_int_or_hex` but passes ``None`` through."""
    if value is None:
        return None
    return from_int_or_hex(value)


def parse_json_u256(value: Any) -> int:
    """Accept a u64 number, a hex string or a decimal string as a 256-bit value."""
    if _is_int(value):
        if not 0 <= value <= U64_MAX:
            raise ValueError(f"expected a hex encoding or decimal number, got {value}")
        return value
    if not isinstance(value, str):
        raise ValueError(f"expected a hex encoding or decimal number, got {value!r}")
    if value == "" or value == "0x":
        return 0
    if value.startswith("0x"):
        try:
            return decode_quantity(value, 256)
        except ValueError as exc:
            raise ValueError(f"Parsing JsonU256 as hex failed {value}: {exc}") from exc
    if not _DECIMAL_DIGITS.fullmatch(value):
        raise ValueError(f"Parsing JsonU256 as decimal failed {value}: invalid digit")
    number = int(value)
    if number > U256_MAX:
        raise ValueError(f"Parsing JsonU256 as decimal failed {value}: overflow")
    return number


def u64_hex_or_number(value: Any) -> int:
    """Accept a hex quantity string or a JSON number as a u64."""
    if isinstance(value, str):
        return decode_quantity(value, 64)
    if _is_int(value):
        if not 0 <= value <= U64_MAX:
            raise ValueError(f"number out of range for u64: {value}")
        return value
    raise ValueError(f"expected a hex string or number, got {value!r}")