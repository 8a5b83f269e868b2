"""Signature fields as they appear in RPC transaction objects."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ethrpc.hexutil import decode_quantity, encode_quantity


def _field(data: Any, key: str) -> Any:
    if not isinstance(data, dict):
        raise ValueError(f"expected an object, got {type(data).__name__}")
    if key not in data:
        raise ValueError(f"missing field `{key}`")
    return data[key]


@dataclass(frozen=True)
class Parity:
    """The y-parity bit of a signature, written as ``"0x0"`` or ``"0x1"``."""

    value: bool = False

    def __bool__(self) -> bool:
        return self.value

    @classmethod
    def from_json(cls, value: Any) -> Parity:
        if value == "0x0":
            return cls(False)
        if value == "0x1":
            return cls(True)
        raise ValueError(
            f'invalid parity value, parity should be either "0x0" or "0x1": {value}'
        )

    def to_json(self) -> str:
        return "0x1" if self.value else "0x0"


@dataclass(frozen=True)
class Signature:
    """The r, s and v fields of a signature, with an optional y parity."""

    r: int = 0
    s: int = 0
    v: int = 0
    y_parity: Parity | None = None

    @classmethod
    def from_json(cls, data: Any) -> Signature:
        raw_parity = data.get("yParity") if isinstance(data, dict) else None
        return cls(
            r=decode_quantity(_field(data, "r"), 256),
            s=decode_quantity(_field(data, "s"), 256),
            v=decode_quantity(_field(data, "v"), 256),
            y_parity=None if raw_parity is None else Parity.from_json(raw_parity),
        )

    def to_json(self) -> dict[str, str]:
        out = {
            "r": encode_quantity(self.r),
            "s": encode_quantity(self.s),
            "v": encode_quantity(self.v),
        }
        if self.y_parity is not None:
            out["yParity"] = self.y_parity.to_json()
        return out