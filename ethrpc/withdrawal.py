"""Validator withdrawals from the consensus layer."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

from ethrpc.hexutil import U64_MAX, decode_quantity, encode_quantity, parse_address

GWEI_TO_WEI = 1_000_000_000
"""Multiplier for converting gwei to wei."""

_ZERO_ADDRESS = "0x" + "00" * 20
_DECIMAL = re.compile(r"\+?[0-9]+")


def _field(data: Any, key: str) -> Any:
    if not isinstance(data, dict):
        raise ValueError(f"expected an object, got {type(data).__name__}")
    if key not in data:
        raise ValueError(f"missing field `{key}`")
    return data[key]


def _quoted_u64(value: Any) -> int:
    if not isinstance(value, str) or not _DECIMAL.fullmatch(value):
        raise ValueError(f"expected a quoted decimal, got {value!r}")
    number = int(value)
    if number > U64_MAX:
        raise ValueError(f"number out of range for u64: {value}")
    return number


@dataclass(frozen=True)
class Withdrawal:
    """A validator withdrawal; ``amount`` is in gwei."""

    index: int = 0
    validator_index: int = 0
    address: str = _ZERO_ADDRESS
    amount: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "address", parse_address(self.address))

    def amount_wei(self) -> int:
        """Return the withdrawal amount in wei."""
        return self.amount * GWEI_TO_WEI

    @classmethod
    def from_json(cls, data: Any) -> Withdrawal:
        return cls(
            index=decode_quantity(_field(data, "index"), 64),
            validator_index=decode_quantity(_field(data, "validatorIndex"), 64),
            address=_field(data, "address"),
            amount=decode_quantity(_field(data, "amount"), 64),
        )

    def to_json(self) -> dict[str, str]:
        return {
            "index": encode_quantity(self.index),
            "validatorIndex": encode_quantity(self.validator_index),
            "address": self.address,
            "amount": encode_quantity(self.amount),
        }

    @classmethod
    def from_beacon_api(cls, data: Any) -> Withdrawal:
        """Read the Beacon API form: snake-case keys and quoted decimals."""
        return cls(
            index=_quoted_u64(_field(data, "index")),
            validator_index=_quoted_u64(_field(data, "validator_index")),
            address=_field(data, "address"),
            amount=_quoted_u64(_field(data, "amount")),
        )

    def to_beacon_api(self) -> dict[str, str]:
        """Write the Beacon API form: snake-case keys and quoted decimals."""
        return {
            "index": str(self.index),
            "validator_index": str(self.validator_index),
            "address": self.address,
            "amount": str(self.amount),
        }