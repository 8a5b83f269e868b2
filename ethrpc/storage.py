"""Storage keys and storage maps that accept values shorter than 32 bytes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ethrpc.hexutil import from_int_or_hex, parse_bytes


@dataclass(frozen=True)
class JsonStorageKey:
    """A 32-byte storage key read as a U256 and written back as trimmed hex.

    Writing back mirrors the input the way geth does for ``eth_getProof``.
    """

    value: bytes = bytes(32)

    def __post_init__(self) -> None:
        raw = bytes(self.value)
        if len(raw) != 32:
            raise ValueError(f"storage key must be 32 bytes, got {len(raw)}")
        object.__setattr__(self, "value", raw)

    @classmethod
    def from_json(cls, value: Any) -> JsonStorageKey:
        number = from_int_or_hex(value)
        return cls(number.to_bytes(32, "big"))

    def to_json(self) -> str:
        number = int.from_bytes(self.value, "big")
        trimmed = number.to_bytes((number.bit_length() + 7) // 8, "big")
        return "0x" + trimmed.hex()


def from_bytes_to_b256(data: bytes) -> bytes:
    """Left-pad up to 32 bytes with zeros; longer input is an error."""
    raw = bytes(data)
    if len(raw) > 32:
        raise ValueError("input too long to be a B256")
    return raw.rjust(32, b"\x00")


def deserialize_storage_map(value: Any) -> dict[bytes, bytes] | None:
    """Read a map of hex keys to hex values, padding each side to 32 bytes."""
    if value is None:
        return None
    if not isinstance(value, dict):
        raise ValueError(f"expected a storage map, got {type(value).__name__}")
    return {
        from_bytes_to_b256(parse_bytes(key)): from_bytes_to_b256(parse_bytes(val))
        for key, val in value.items()
    }