"""Actions and outputs of parity-style traces."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Union

from ethrpc.hexutil import (
    U64_MAX,
    decode_quantity,
    encode_bytes,
    encode_quantity,
    parse_address,
    parse_bytes,
)

_ZERO_ADDRESS = "0x" + "00" * 20


def _expect_object(data: Any) -> dict:
    if not isinstance(data, dict):
        raise ValueError(f"expected an object, got {type(data).__name__}")
    return data


def _field(data: dict, key: str) -> Any:
    if key not in data:
        raise ValueError(f"missing field `{key}`")
    value = data[key]
    if value is None:
        raise ValueError(f"field `{key}` must not be null")
    return value


def _check_u64(value: Any) -> int:
    if not isinstance(value, int) or isinstance(value, bool) or not 0 <= value <= U64_MAX:
        raise ValueError(f"expected a u64 number, got {value!r}")
    return value


class TraceType(enum.Enum):
    """Diagnostic targets that a parity trace call may request."""

    TRACE = "trace"
    VM_TRACE = "vmTrace"
    STATE_DIFF = "stateDiff"


class ActionType(enum.Enum):
    """The kind of a trace action; ``selfdestruct`` is read as ``suicide``."""

    CALL = "call"
    CREATE = "create"
    SELFDESTRUCT = "suicide"
    REWARD = "reward"

    @classmethod
    def _missing_(cls, value: object) -> ActionType | None:
        if value == "selfdestruct":
            return cls.SELFDESTRUCT
        return None


class CallType(enum.Enum):
    """The type of a call."""

    NONE = "none"
    CALL = "call"
    CALL_CODE = "callcode"
    DELEGATE_CALL = "delegatecall"
    STATIC_CALL = "staticcall"


class RewardType(enum.Enum):
    """The kind of a block reward."""

    BLOCK = "block"
    UNCLE = "uncle"


@dataclass
class CallAction:
    """A call or message transaction."""

    from_address: str = _ZERO_ADDRESS
    call_type: CallType = CallType.NONE
    gas: int = 0
    input: bytes = b""
    to: str = _ZERO_ADDRESS
    value: int = 0

    def __post_init__(self) -> None:
        self.from_address = parse_address(self.from_address)
        self.to = parse_address(self.to)
        self.input = bytes(self.input)

    @classmethod
    def from_json(cls, data: Any) -> CallAction:
        data = _expect_object(data)
        return cls(
            from_address=_field(data, "from"),
            call_type=CallType(_field(data, "callType")),
            gas=decode_quantity(_field(data, "gas"), 64),
            input=parse_bytes(_field(data, "input")),
            to=_field(data, "to"),
            value=decode_quantity(_field(data, "value"), 256),
        )

    def to_json(self) -> dict[str, Any]:
        return {
            "from": self.from_address,
            "callType": self.call_type.value,
            "gas": encode_quantity(self.gas),
            "input": encode_bytes(self.input),
            "to": self.to,
            "value": encode_quantity(self.value),
        }


@dataclass
class CreateAction:
    """A ``CREATE`` operation or contract-creating transaction."""

    from_address: str = _ZERO_ADDRESS
    gas: int = 0
    init: bytes = b""
    value: int = 0

    def __post_init__(self) -> None:
        self.from_address = parse_address(self.from_address)
        self.init = bytes(self.init)

    @classmethod
    def from_json(cls, data: Any) -> CreateAction:
        data = _expect_object(data)
        return cls(
            from_address=_field(data, "from"),
            gas=decode_quantity(_field(data, "gas"), 64),
            init=parse_bytes(_field(data, "init")),
            value=decode_quantity(_field(data, "value"), 256),
        )

    def to_json(self) -> dict[str, Any]:
        return {
            "from": self.from_address,
            "gas": encode_quantity(self.gas),
            "init": encode_bytes(self.init),
            "value": encode_quantity(self.value),
        }


@dataclass
class RewardAction:
    """A block or uncle reward."""

    author: str = _ZERO_ADDRESS
    reward_type: RewardType = RewardType.BLOCK
    value: int = 0

    def __post_init__(self) -> None:
        self.author = parse_address(self.author)

    @classmethod
    def from_json(cls, data: Any) -> RewardAction:
        data = _expect_object(data)
        return cls(
            author=_field(data, "author"),
            reward_type=RewardType(_field(data, "rewardType")),
            value=decode_quantity(_field(data, "value"), 256),
        )

    def to_json(self) -> dict[str, Any]:
        return {
            "author": self.author,
            "rewardType": self.reward_type.value,
            "value": encode_quantity(self.value),
        }


@dataclass
class SelfdestructAction:
    """A selfdestruct (formerly ``suicide``) of a contract."""

    address: str = _ZERO_ADDRESS
    balance: int = 0
    refund_address: str = _ZERO_ADDRESS

    def __post_init__(self) -> None:
        self.address = parse_address(self.address)
        self.refund_address = parse_address(self.refund_address)

    @classmethod
    def from_json(cls, data: Any) -> SelfdestructAction:
        data = _expect_object(data)
        return cls(
            address=_field(data, "address"),
            balance=decode_quantity(_field(data, "balance"), 256),
            refund_address=_field(data, "refundAddress"),
        )

    def to_json(self) -> dict[str, Any]:
        return {
            "address": self.address,
            "balance": encode_quantity(self.balance),
            "refundAddress": self.refund_address,
        }


Action = Union[CallAction, CreateAction, SelfdestructAction, RewardAction]

_ACTION_CLASSES: dict[ActionType, type] = {
    ActionType.CALL: CallAction,
    ActionType.CREATE: CreateAction,
    ActionType.SELFDESTRUCT: SelfdestructAction,
    ActionType.REWARD: RewardAction,
}


def parse_action(type_name: Any, data: Any) -> Action:
    """Read an action whose kind is named by ``type_name``."""
    kind = ActionType(type_name)
    return _ACTION_CLASSES[kind].from_json(data)


def action_kind(action: Action) -> ActionType:
    """Return what kind of action ``action`` is."""
    for kind, action_class in _ACTION_CLASSES.items():
        if isinstance(action, action_class):
            return kind
    raise TypeError(f"not a trace action: {type(action).__name__}")


@dataclass
class CallOutput:
    """Output of a regular call."""

    gas_used: int = 0
    output: bytes = b""

    def __post_init__(self) -> None:
        self.output = bytes(self.output)

    @classmethod
    def from_json(cls, data: Any) -> CallOutput:
        data = _expect_object(data)
        return cls(
            gas_used=decode_quantity(_field(data, "gasUsed"), 64),
            output=parse_bytes(_field(data, "output")),
        )

    def to_json(self) -> dict[str, Any]:
        return {"gasUsed": encode_quantity(self.gas_used), "output": encode_bytes(self.output)}


@dataclass
class CreateOutput:
    """Output of a contract creation."""

    address: str = _ZERO_ADDRESS
    code: bytes = b""
    gas_used: int = 0

    def __post_init__(self) -> None:
        self.address = parse_address(self.address)
        self.code = bytes(self.code)

    @classmethod
    def from_json(cls, data: Any) -> CreateOutput:
        data = _expect_object(data)
        return cls(
            address=_field(data, "address"),
            code=parse_bytes(_field(data, "code")),
            gas_used=decode_quantity(_field(data, "gasUsed"), 64),
        )

    def to_json(self) -> dict[str, Any]:
        return {
            "address": self.address,
            "code": encode_bytes(self.code),
            "gasUsed": encode_quantity(self.gas_used),
        }


TraceOutput = Union[CallOutput, CreateOutput]


def parse_trace_output(data: Any) -> TraceOutput:
    """Read a trace output, trying a call output before a create output."""
    try:
        return CallOutput.from_json(data)
    except ValueError:
        pass
    try:
        return CreateOutput.from_json(data)
    except ValueError as exc:
        raise ValueError("data did not match any variant of TraceOutput") from exc


def set_output_gas_used(output: TraceOutput, gas_used: int) -> None:
    """Set the gas used recorded in ``output``."""
    output.gas_used = _check_u64(gas_used)