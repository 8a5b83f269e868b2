"""EIP-2930 access lists."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator

from ethrpc.hexutil import decode_quantity, encode_quantity, parse_address

_ZERO_ADDRESS = "0x" + "00" * 20


def _field(data: Any, key: str) -> Any:
    if not isinstance(data, dict):
        raise ValueError(f"expected an object, got {type(data).__name__}")
    if key not in data:
        raise ValueError(f"missing field `{key}`")
    return data[key]


def _as_list(value: Any, what: str) -> list:
    if not isinstance(value, list):
        raise ValueError(f"expected a list for {what}, got {type(value).__name__}")
    return value


@dataclass(frozen=True)
class AccessListItem:
    """An address and the storage keys loaded at the start of execution."""

    address: str = _ZERO_ADDRESS
    storage_keys: tuple[int, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "address", parse_address(self.address))
        object.__setattr__(self, "storage_keys", tuple(self.storage_keys))

    @classmethod
    def from_json(cls, data: Any) -> AccessListItem:
        keys = _as_list(_field(data, "storageKeys"), "storageKeys")
        return cls(
            address=_field(data, "address"),
            storage_keys=tuple(decode_quantity(key, 256) for key in keys),
        )

    def to_json(self) -> dict[str, Any]:
        return {
            "address": self.address,
            "storageKeys": [encode_quantity(key) for key in self.storage_keys],
        }


@dataclass(frozen=True)
class AccessList:
    """An access list as defined in EIP-2930."""

    items: tuple[AccessListItem, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", tuple(self.items))

    def __iter__(self) -> Iterator[AccessListItem]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def flatten(self) -> Iterator[tuple[str, tuple[int, ...]]]:
        """Yield each address with its storage keys."""
        for item in self.items:
            yield item.address, item.storage_keys

    def flattened(self) -> list[tuple[str, list[int]]]:
        """Return the list as ``(address, keys)`` pairs."""
        return [(address, list(keys)) for address, keys in self.flatten()]

    @classmethod
    def from_json(cls, data: Any) -> AccessList:
        return cls(tuple(AccessListItem.from_json(item) for item in _as_list(data, "access list")))

    def to_json(self) -> list[dict[str, Any]]:
        return [item.to_json() for item in self.items]

    @classmethod
    def of(cls, items: Iterable[AccessListItem]) -> AccessList:
        return cls(tuple(items))


@dataclass
class AccessListWithGasUsed:
    """An access list together with the gas estimated for using it."""

    access_list: AccessList = field(default_factory=AccessList)
    gas_used: int = 0

    @classmethod
    def from_json(cls, data: Any) -> AccessListWithGasUsed:
        return cls(
            access_list=AccessList.from_json(_field(data, "accessList")),
            gas_used=decode_quantity(_field(data, "gasUsed"), 256),
        )

    def to_json(self) -> dict[str, Any]:
        return {
            "accessList": self.access_list.to_json(),
            "gasUsed": encode_quantity(self.gas_used),
        }