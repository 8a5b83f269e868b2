"""The ``trace_filter`` request and matching of addresses against it."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any

from ethrpc.hexutil import U64_MAX, encode_quantity, parse_address, u64_hex_or_number

_KNOWN_FIELDS = frozenset(
    {"fromBlock", "toBlock", "fromAddress", "toAddress", "mode", "after", "count"}
)


class TraceFilterMode(enum.Enum):
    """How the ``from`` and ``to`` address filters combine."""

    UNION = "union"
    INTERSECTION = "intersection"


def _opt_block(data: dict, key: str) -> int | None:
    if key not in data:
        raise ValueError(f"missing field `{key}`")
    value = data[key]
    return None if value is None else u64_hex_or_number(value)


def _opt_u64(value: Any) -> int | None:
    if value is None:
        return None
    if not isinstance(value, int) or isinstance(value, bool) or not 0 <= value <= U64_MAX:
        raise ValueError(f"expected a u64 number, got {value!r}")
    return value


def _addresses(value: Any, key: str) -> tuple[str, ...]:
    if value is None:
        raise ValueError(f"field `{key}` must not be null")
    if not isinstance(value, list):
        raise ValueError(f"field `{key}` must be a list")
    return tuple(parse_address(item) for item in value)


@dataclass
class TraceFilter:
    """Parameters of a ``trace_filter`` request."""

    from_block: int | None = None
    to_block: int | None = None
    from_address: tuple[str, ...] = ()
    to_address: tuple[str, ...] = ()
    mode: TraceFilterMode = TraceFilterMode.UNION
    after: int | None = None
    count: int | None = None

    def __post_init__(self) -> None:
        self.from_address = tuple(parse_address(a) for a in self.from_address)
        self.to_address = tuple(parse_address(a) for a in self.to_address)

    @classmethod
    def from_json(cls, data: Any) -> TraceFilter:
        if not isinstance(data, dict):
            raise ValueError(f"expected an object, got {type(data).__name__}")
        unknown = set(data) - _KNOWN_FIELDS
        if unknown:
            raise ValueError(f"unknown field `{sorted(unknown)[0]}`")
        return cls(
            from_block=_opt_block(data, "fromBlock"),
            to_block=_opt_block(data, "toBlock"),
            from_address=_addresses(data.get("fromAddress", []), "fromAddress"),
            to_address=_addresses(data.get("toAddress", []), "toAddress"),
            mode=TraceFilterMode(data.get("mode", TraceFilterMode.UNION.value)),
            after=_opt_u64(data.get("after")),
            count=_opt_u64(data.get("count")),
        )

    def to_json(self) -> dict[str, Any]:
        return {
            "fromBlock": None if self.from_block is None else encode_quantity(self.from_block),
            "toBlock": None if self.to_block is None else encode_quantity(self.to_block),
            "fromAddress": list(self.from_address),
            "toAddress": list(self.to_address),
            "mode": self.mode.value,
            "after": self.after,
            "count": self.count,
        }

    def matcher(self) -> TraceFilterMatcher:
        """Return a matcher for this filter's addresses and mode."""
        return TraceFilterMatcher(
            mode=self.mode,
            from_addresses=frozenset(self.from_address),
            to_addresses=frozenset(self.to_address),
        )


@dataclass(frozen=True)
class TraceFilterMatcher:
    """Matches ``from``/``to`` addresses; an empty set matches every address."""

    mode: TraceFilterMode
    from_addresses: frozenset[str]
    to_addresses: frozenset[str]

    def matches(self, from_address: str, to_address: str | None) -> bool:
        """Return whether the given addresses pass this filter."""
        sender = parse_address(from_address)
        from_ok = sender in self.from_addresses
        to_ok = to_address is not None and parse_address(to_address) in self.to_addresses
        if not self.from_addresses and not self.to_addresses:
            return True
        if not self.to_addresses:
            return from_ok
        if not self.from_addresses:
            return to_ok
        if self.mode is TraceFilterMode.UNION:
            return from_ok or to_ok
        return from_ok and to_ok