"""Types for the geth ``callTracer``."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any

from ethrpc.hexutil import (
    decode_quantity,
    encode_b256,
    encode_bytes,
    encode_quantity,
    from_int_or_hex,
    parse_address,
    parse_b256,
    parse_bytes,
)

_ZERO_ADDRESS = "0x" + "00" * 20


def _expect_object(data: Any) -> dict:
    if not isinstance(data, dict):
        raise ValueError(f"expected an object, got {type(data).__name__}")
    return data


def _required(data: dict, key: str) -> Any:
    if key not in data:
        raise ValueError(f"missing field `{key}`")
    value = data[key]
    if value is None:
        raise ValueError(f"field `{key}` must not be null")
    return value


def _opt_str(data: dict, key: str) -> str | None:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise ValueError(f"field `{key}` must be a string")
    return value


def _opt_bool(data: dict, key: str) -> bool | None:
    value = data.get(key)
    if value is not None and not isinstance(value, bool):
        raise ValueError(f"field `{key}` must be a boolean")
    return value


def _list(data: dict, key: str) -> list:
    value = data.get(key, [])
    if not isinstance(value, list):
        raise ValueError(f"field `{key}` must be a list")
    return value


@dataclass
class CallLogFrame:
    """A log emitted inside a call frame."""

    address: str | None = None
    topics: list[bytes] | None = None
    data: bytes | None = None

    def __post_init__(self) -> None:
        if self.address is not None:
            self.address = parse_address(self.address)

    @classmethod
    def from_json(cls, data: Any) -> CallLogFrame:
        data = _expect_object(data)
        address = data.get("address")
        topics = data.get("topics")
        if topics is not None and not isinstance(topics, list):
            raise ValueError("field `topics` must be a list")
        payload = data.get("data")
        return cls(
            address=address,
            topics=None if topics is None else [parse_b256(t) for t in topics],
            data=None if payload is None else parse_bytes(payload),
        )

    def to_json(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.address is not None:
            out["address"] = self.address
        if self.topics is not None:
            out["topics"] = [encode_b256(t) for t in self.topics]
        if self.data is not None:
            out["data"] = encode_bytes(self.data)
        return out


@dataclass
class CallFrame:
    """One call frame of a ``callTracer`` result, with its sub-calls."""

    from_address: str = _ZERO_ADDRESS
    gas: int = 0
    gas_used: int = 0
    to: str | None = None
    input: bytes = b""
    output: bytes | None = None
    error: str | None = None
    revert_reason: str | None = None
    calls: list[CallFrame] = field(default_factory=list)
    logs: list[CallLogFrame] = field(default_factory=list)
    value: int | None = None
    call_type: str = ""

    def __post_init__(self) -> None:
        self.from_address = parse_address(self.from_address)
        if self.to is not None:
            self.to = parse_address(self.to)

    @classmethod
    def from_json(cls, data: Any) -> CallFrame:
        data = _expect_object(data)
        call_type = _required(data, "type")
        if not isinstance(call_type, str):
            raise ValueError("field `type` must be a string")
        output = data.get("output")
        value = data.get("value")
        return cls(
            from_address=_required(data, "from"),
            gas=from_int_or_hex(data["gas"]) if "gas" in data else 0,
            gas_used=from_int_or_hex(data["gasUsed"]) if "gasUsed" in data else 0,
            to=data.get("to"),
            input=parse_bytes(_required(data, "input")),
            output=None if output is None else parse_bytes(output),
            error=_opt_str(data, "error"),
            revert_reason=_opt_str(data, "revertReason"),
            calls=[CallFrame.from_json(c) for c in _list(data, "calls")],
            logs=[CallLogFrame.from_json(log) for log in _list(data, "logs")],
            value=None if value is None else decode_quantity(value, 256),
            call_type=call_type,
        )

    def to_json(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "from": self.from_address,
            "gas": encode_quantity(self.gas),
            "gasUsed": encode_quantity(self.gas_used),
        }
        if self.to is not None:
            out["to"] = self.to
        out["input"] = encode_bytes(self.input)
        if self.output is not None:
            out["output"] = encode_bytes(self.output)
        if self.error is not None:
            out["error"] = self.error
        if self.revert_reason is not None:
            out["revertReason"] = self.revert_reason
        if self.calls:
            out["calls"] = [c.to_json() for c in self.calls]
        if self.logs:
            out["logs"] = [log.to_json() for log in self.logs]
        if self.value is not None:
            out["value"] = encode_quantity(self.value)
        out["type"] = self.call_type
        return out


@dataclass
class CallConfig:
    """Config of the ``callTracer``."""

    only_top_call: bool | None = None
    with_log: bool | None = None

    def enable_only_top_call(self) -> CallConfig:
        """Return a copy that traces only the top-level call."""
        return replace(self, only_top_call=True)

    def enable_log(self) -> CallConfig:
        """Return a copy that records logs."""
        return replace(self, with_log=True)

    @classmethod
    def from_json(cls, data: Any) -> CallConfig:
        data = _expect_object(data)
        return cls(
            only_top_call=_opt_bool(data, "onlyTopCall"),
            with_log=_opt_bool(data, "withLog"),
        )

    def to_json(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.only_top_call is not None:
            out["onlyTopCall"] = self.only_top_call
        if self.with_log is not None:
            out["withLog"] = self.with_log
        return out