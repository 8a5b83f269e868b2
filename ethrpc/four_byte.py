"""Result of the geth ``4byteTracer``."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator

from ethrpc.hexutil import U64_MAX


@dataclass
class FourByteFrame:
    """Counts of ``SELECTOR-CALLDATASIZE`` keys seen during a transaction."""

    counts: dict[str, int] = field(default_factory=dict)

    def __getitem__(self, key: str) -> int:
        return self.counts[key]

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self.counts))

    def __len__(self) -> int:
        return len(self.counts)

    @classmethod
    def from_json(cls, data: Any) -> FourByteFrame:
        if not isinstance(data, dict):
            raise ValueError(f"expected an object, got {type(data).__name__}")
        counts = {}
        for key, value in data.items():
            if not isinstance(value, int) or isinstance(value, bool) or not 0 <= value <= U64_MAX:
                raise ValueError(f"expected a u64 count for {key!r}, got {value!r}")
            counts[key] = value
        return cls(counts)

    def to_json(self) -> dict[str, int]:
        return {key: self.counts[key] for key in sorted(self.counts)}