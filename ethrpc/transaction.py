"""Transaction objects as returned by the RPC."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, TypeVar

from ethrpc.access_list import AccessListItem
from ethrpc.hexutil import (
    decode_quantity,
    encode_b256,
    encode_bytes,
    encode_quantity,
    parse_address,
    parse_b256,
    parse_bytes,
)
from ethrpc.signature import Signature

_ZERO_ADDRESS = "0x" + "00" * 20
_ZERO_HASH = bytes(32)

T = TypeVar("T")


def _required(data: dict, key: str) -> Any:
    if key not in data:
        raise ValueError(f"missing field `{key}`")
    value = data[key]
    if value is None:
        raise ValueError(f"field `{key}` must not be null")
    return value


def _optional(data: dict, key: str, parse: Callable[[Any], T]) -> T | None:
    value = data.get(key)
    return None if value is None else parse(value)


def _u64(value: Any) -> int:
    return decode_quantity(value, 64)


def _u128(value: Any) -> int:
    return decode_quantity(value, 128)


def _u256(value: Any) -> int:
    return decode_quantity(value, 256)


def _opt_hex(value: int | None) -> str | None:
    return None if value is None else encode_quantity(value)


@dataclass(frozen=True)
class TransactionInfo:
    """Context of a transaction within a block."""

    hash: bytes | None = None
    index: int | None = None
    block_hash: bytes | None = None
    block_number: int | None = None
    base_fee: int | None = None


@dataclass
class Transaction:
    """A transaction object used in RPC."""

    hash: bytes = _ZERO_HASH
    nonce: int = 0
    block_hash: bytes | None = None
    block_number: int | None = None
    transaction_index: int | None = None
    from_address: str = _ZERO_ADDRESS
    to: str | None = None
    value: int = 0
    gas_price: int | None = None
    gas: int = 0
    max_fee_per_gas: int | None = None
    max_priority_fee_per_gas: int | None = None
    max_fee_per_blob_gas: int | None = None
    input: bytes = b""
    signature: Signature | None = None
    chain_id: int | None = None
    blob_versioned_hashes: list[bytes] = field(default_factory=list)
    access_list: list[AccessListItem] | None = None
    transaction_type: int | None = None

    def __post_init__(self) -> None:
        self.from_address = parse_address(self.from_address)
        if self.to is not None:
            self.to = parse_address(self.to)

    @classmethod
    def from_json(cls, data: Any) -> Transaction:
        if not isinstance(data, dict):
            raise ValueError(f"expected an object, got {type(data).__name__}")
        signature = None
        if all(data.get(key) is not None for key in ("r", "s", "v")):
            signature = Signature.from_json(data)
        access_list = data.get("accessList")
        if access_list is not None and not isinstance(access_list, list):
            raise ValueError("accessList must be a list")
        hashes = data.get("blobVersionedHashes") or []
        if not isinstance(hashes, list):
            raise ValueError("blobVersionedHashes must be a list")
        return cls(
            hash=parse_b256(_required(data, "hash")),
            nonce=_u64(_required(data, "nonce")),
            block_hash=_optional(data, "blockHash", parse_b256),
            block_number=_optional(data, "blockNumber", _u256),
            transaction_index=_optional(data, "transactionIndex", _u256),
            from_address=_required(data, "from"),
            to=_optional(data, "to", parse_address),
            value=_u256(_required(data, "value")),
            gas_price=_optional(data, "gasPrice", _u128),
            gas=_u256(_required(data, "gas")),
            max_fee_per_gas=_optional(data, "maxFeePerGas", _u128),
            max_priority_fee_per_gas=_optional(data, "maxPriorityFeePerGas", _u128),
            max_fee_per_blob_gas=_optional(data, "maxFeePerBlobGas", _u128),
            input=parse_bytes(_required(data, "input")),
            signature=signature,
            chain_id=_optional(data, "chainId", _u64),
            blob_versioned_hashes=[parse_b256(item) for item in hashes],
            access_list=(
                None
                if access_list is None
                else [AccessListItem.from_json(item) for item in access_list]
            ),
            transaction_type=_optional(data, "type", _u64),
        )

    def to_json(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "hash": encode_b256(self.hash),
            "nonce": encode_quantity(self.nonce),
            "blockHash": None if self.block_hash is None else encode_b256(self.block_hash),
            "blockNumber": _opt_hex(self.block_number),
            "transactionIndex": _opt_hex(self.transaction_index),
            "from": self.from_address,
            "to": self.to,
            "value": encode_quantity(self.value),
        }
        if self.gas_price is not None:
            out["gasPrice"] = encode_quantity(self.gas_price)
        out["gas"] = encode_quantity(self.gas)
        optional_fees = (
            ("maxFeePerGas", self.max_fee_per_gas),
            ("maxPriorityFeePerGas", self.max_priority_fee_per_gas),
            ("maxFeePerBlobGas", self.max_fee_per_blob_gas),
        )
        for key, fee in optional_fees:
            if fee is not None:
                out[key] = encode_quantity(fee)
        out["input"] = encode_bytes(self.input)
        if self.signature is not None:
            out.update(self.signature.to_json())
        out["chainId"] = _opt_hex(self.chain_id)
        if self.blob_versioned_hashes:
            out["blobVersionedHashes"] = [encode_b256(h) for h in self.blob_versioned_hashes]
        if self.access_list is not None:
            out["accessList"] = [item.to_json() for item in self.access_list]
        if self.transaction_type is not None:
            out["type"] = encode_quantity(self.transaction_type)
        return out