"""Transaction requests from RPC input and the typed requests they convert into."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Callable, TypeVar, Union

from ethrpc.access_list import AccessList
from ethrpc.hexutil import (
    decode_quantity,
    encode_bytes,
    encode_quantity,
    parse_address,
    parse_bytes,
)

T = TypeVar("T")

_ADDRESS_LENGTH = 20
_EMPTY_STRING = 0x80
_LONG_STRING = 0xB7
_LIST_START = 0xC0


class RlpError(ValueError):
    """Raised when RLP input cannot be decoded."""


def _check_uint(value: Any, bits: int, what: str) -> int:
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValueError(f"{what} must be an integer, got {type(value).__name__}")
    if value < 0 or value.bit_length() > bits:
        raise ValueError(f"{what} does not fit in {bits} bits: {value}")
    return value


@dataclass(frozen=True)
class TransactionKind:
    """The ``to`` side of a transaction: a call to an address, or a contract creation."""

    to: str | None = None

    def __post_init__(self) -> None:
        if self.to is not None:
            object.__setattr__(self, "to", parse_address(self.to))

    @classmethod
    def call(cls, to: str) -> TransactionKind:
        return cls(to)

    @classmethod
    def create(cls) -> TransactionKind:
        return cls(None)

    @property
    def is_create(self) -> bool:
        return self.to is None

    def as_call(self) -> str | None:
        """Return the callee's address, or ``None`` for a creation."""
        return self.to

    def rlp_encode(self) -> bytes:
        """Encode as an RLP string: the address, or the empty string for a creation."""
        if self.to is None:
            return bytes([_EMPTY_STRING])
        return bytes([_EMPTY_STRING + _ADDRESS_LENGTH]) + bytes.fromhex(self.to[2:])

    @classmethod
    def rlp_decode(cls, data: bytes) -> tuple[TransactionKind, bytes]:
        """Decode from the front of ``data``; return the kind and the unread rest."""
        buf = bytes(data)
        if not buf:
            raise RlpError("input too short")
        first = buf[0]
        if first == _EMPTY_STRING:
            return cls(None), buf[1:]
        if first >= _LIST_START:
            raise RlpError("unexpected list")
        if first < _EMPTY_STRING:
            start, length = 0, 1
        elif first <= _LONG_STRING:
            start, length = 1, first - _EMPTY_STRING
        else:
            size_of_length = first - _LONG_STRING
            if len(buf) < 1 + size_of_length:
                raise RlpError("input too short")
            start = 1 + size_of_length
            length = int.from_bytes(buf[1:start], "big")
        if length != _ADDRESS_LENGTH:
            raise RlpError(f"unexpected length: expected {_ADDRESS_LENGTH}, got {length}")
        end = start + length
        if len(buf) < end:
            raise RlpError("input too short")
        return cls("0x" + buf[start:end].hex()), buf[end:]


@dataclass(frozen=True)
class LegacyTransactionRequest:
    """A legacy (pre-EIP-2718) transaction request."""

    nonce: int
    gas_price: int
    gas_limit: int
    kind: TransactionKind
    value: int
    input: bytes
    chain_id: int | None = None


@dataclass(frozen=True)
class EIP2930TransactionRequest:
    """An EIP-2930 transaction request with a state access list."""

    chain_id: int
    nonce: int
    gas_price: int
    gas_limit: int
    kind: TransactionKind
    value: int
    input: bytes
    access_list: AccessList


@dataclass(frozen=True)
class EIP1559TransactionRequest:
    """An EIP-1559 transaction request."""

    chain_id: int
    nonce: int
    max_priority_fee_per_gas: int
    max_fee_per_gas: int
    gas_limit: int
    kind: TransactionKind
    value: int
    input: bytes
    access_list: AccessList


TypedTransactionRequest = Union[
    LegacyTransactionRequest, EIP2930TransactionRequest, EIP1559TransactionRequest
]

_REQUEST_FIELDS = frozenset(
    {
        "from",
        "to",
        "gasPrice",
        "maxFeePerGas",
        "maxPriorityFeePerGas",
        "gas",
        "value",
        "data",
        "input",
        "nonce",
        "accessList",
        "type",
    }
)


def _opt(data: dict, key: str, parse: Callable[[Any], T]) -> T | None:
    value = data.get(key)
    return None if value is None else parse(value)


def _opt_hex(value: int | None) -> str | None:
    return None if value is None else encode_quantity(value)


@dataclass(frozen=True)
class TransactionRequest:
    """Any transaction request received over RPC; every field is optional."""

    from_address: str | None = None
    to: str | None = None
    gas_price: int | None = None
    max_fee_per_gas: int | None = None
    max_priority_fee_per_gas: int | None = None
    gas: int | None = None
    value: int | None = None
    data: bytes | None = None
    nonce: int | None = None
    access_list: AccessList | None = None
    transaction_type: int | None = None

    def __post_init__(self) -> None:
        if self.from_address is not None:
            object.__setattr__(self, "from_address", parse_address(self.from_address))
        if self.to is not None:
            object.__setattr__(self, "to", parse_address(self.to))

    @classmethod
    def from_json(cls, data: Any) -> TransactionRequest:
        if not isinstance(data, dict):
            raise ValueError(f"expected an object, got {type(data).__name__}")
        unknown = set(data) - _REQUEST_FIELDS
        if unknown:
            raise ValueError(f"unknown field `{sorted(unknown)[0]}`")
        if "data" in data and "input" in data:
            raise ValueError("duplicate field `data`")
        payload = data.get("data", data.get("input"))
        return cls(
            from_address=_opt(data, "from", parse_address),
            to=_opt(data, "to", parse_address),
            gas_price=_opt(data, "gasPrice", lambda v: decode_quantity(v, 128)),
            max_fee_per_gas=_opt(data, "maxFeePerGas", lambda v: decode_quantity(v, 128)),
            max_priority_fee_per_gas=_opt(
                data, "maxPriorityFeePerGas", lambda v: decode_quantity(v, 128)
            ),
            gas=_opt(data, "gas", lambda v: decode_quantity(v, 256)),
            value=_opt(data, "value", lambda v: decode_quantity(v, 256)),
            data=None if payload is None else parse_bytes(payload),
            nonce=_opt(data, "nonce", lambda v: decode_quantity(v, 64)),
            access_list=_opt(data, "accessList", AccessList.from_json),
            transaction_type=_opt(data, "type", lambda v: decode_quantity(v, 8)),
        )

    def to_json(self) -> dict[str, Any]:
        return {
            "from": self.from_address,
            "to": self.to,
            "gasPrice": _opt_hex(self.gas_price),
            "maxFeePerGas": _opt_hex(self.max_fee_per_gas),
            "maxPriorityFeePerGas": _opt_hex(self.max_priority_fee_per_gas),
            "gas": _opt_hex(self.gas),
            "value": _opt_hex(self.value),
            "data": None if self.data is None else encode_bytes(self.data),
            "nonce": _opt_hex(self.nonce),
            "accessList": None if self.access_list is None else self.access_list.to_json(),
            "type": _opt_hex(self.transaction_type),
        }

    def _kind(self) -> TransactionKind:
        return TransactionKind(self.to)

    def into_typed_request(self) -> TypedTransactionRequest | None:
        """Convert into a typed request.

        Returns ``None`` when both ``gas_price`` and ``max_fee_per_gas`` are set.
        """
        gas_price = self.gas_price
        max_fee = self.max_fee_per_gas
        access_list = self.access_list
        nonce = self.nonce or 0
        gas_limit = self.gas or 0
        value = self.value or 0
        payload = self.data if self.data is not None else b""

        if gas_price is not None and max_fee is None and access_list is None:
            return LegacyTransactionRequest(
                nonce=nonce,
                gas_price=gas_price,
                gas_limit=gas_limit,
                kind=self._kind(),
                value=value,
                input=payload,
                chain_id=None,
            )
        if max_fee is None and access_list is not None:
            return EIP2930TransactionRequest(
                chain_id=0,
                nonce=nonce,
                gas_price=gas_price or 0,
                gas_limit=gas_limit,
                kind=self._kind(),
                value=value,
                input=payload,
                access_list=access_list,
            )
        if gas_price is None:
            return EIP1559TransactionRequest(
                chain_id=0,
                nonce=nonce,
                max_priority_fee_per_gas=self.max_priority_fee_per_gas or 0,
                max_fee_per_gas=max_fee or 0,
                gas_limit=gas_limit,
                kind=self._kind(),
                value=value,
                input=payload,
                access_list=access_list if access_list is not None else AccessList(),
            )
        return None

    def with_gas_limit(self, gas_limit: int) -> TransactionRequest:
        return replace(self, gas=_check_uint(gas_limit, 64, "gas limit"))

    def with_nonce(self, nonce: int) -> TransactionRequest:
        return replace(self, nonce=_check_uint(nonce, 64, "nonce"))

    def with_max_fee_per_gas(self, max_fee_per_gas: int) -> TransactionRequest:
        return replace(
            self, max_fee_per_gas=_check_uint(max_fee_per_gas, 128, "max fee per gas")
        )

    def with_max_priority_fee_per_gas(self, max_priority_fee_per_gas: int) -> TransactionRequest:
        return replace(
            self,
            max_priority_fee_per_gas=_check_uint(
                max_priority_fee_per_gas, 128, "max priority fee per gas"
            ),
        )

    def with_to(self, to: str) -> TransactionRequest:
        return replace(self, to=to)

    def with_value(self, value: int) -> TransactionRequest:
        return replace(self, value=_check_uint(value, 128, "value"))

    def with_access_list(self, access_list: AccessList) -> TransactionRequest:
        return replace(self, access_list=access_list)

    def with_input(self, data: bytes) -> TransactionRequest:
        return replace(self, data=bytes(data))

    def with_transaction_type(self, transaction_type: int) -> TransactionRequest:
        return replace(
            self, transaction_type=_check_uint(transaction_type, 8, "transaction type")
        )


__all__ = [
    "EIP1559TransactionRequest",
    "EIP2930TransactionRequest",
    "LegacyTransactionRequest",
    "RlpError",
    "TransactionKind",
    "TransactionRequest",
    "TypedTransactionRequest",
    field.__name__ and "TransactionRequest",
][:-1]