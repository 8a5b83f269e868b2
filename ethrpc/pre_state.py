"""Types for the prestate tracer in its default and diff modes."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any

from ethrpc.hexutil import (
    U64_MAX,
    encode_b256,
    encode_bytes,
    encode_quantity,
    from_int_or_hex_opt,
    parse_address,
    parse_b256,
    parse_bytes,
)

_ZERO_WORD = bytes(32)


def _expect_object(data: Any) -> dict:
    if not isinstance(data, dict):
        raise ValueError(f"expected an object, got {type(data).__name__}")
    return data


def _opt_u64(value: Any) -> int | None:
    if value is None:
        return None
    if not isinstance(value, int) or isinstance(value, bool) or not 0 <= value <= U64_MAX:
        raise ValueError(f"expected a u64 number, got {value!r}")
    return value


@dataclass
class AccountState:
    """The balance, code, nonce and storage of an account."""

    balance: int | None = None
    code: bytes | None = None
    nonce: int | None = None
    storage: dict[bytes, bytes] = field(default_factory=dict)

    @classmethod
    def from_account_info(cls, nonce: int, balance: int, code: bytes | None) -> AccountState:
        """Build a state, omitting a zero nonce and empty code."""
        return cls(
            balance=balance,
            code=code if code else None,
            nonce=nonce if nonce != 0 else None,
        )

    def remove_matching_account_info(self, other: AccountState) -> None:
        """Clear balance, nonce and code where they equal those of ``other``."""
        if self.balance == other.balance:
            self.balance = None
        if self.nonce == other.nonce:
            self.nonce = None
        if self.code == other.code:
            self.code = None

    @classmethod
    def from_json(cls, data: Any) -> AccountState:
        data = _expect_object(data)
        code = data.get("code")
        storage = data.get("storage", {})
        if not isinstance(storage, dict):
            raise ValueError("field `storage` must be an object")
        return cls(
            balance=from_int_or_hex_opt(data.get("balance")),
            code=None if code is None else parse_bytes(code),
            nonce=_opt_u64(data.get("nonce")),
            storage={parse_b256(k): parse_b256(v) for k, v in storage.items()},
        )

    def to_json(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.balance is not None:
            out["balance"] = encode_quantity(self.balance)
        if self.code is not None:
            out["code"] = encode_bytes(self.code)
        if self.nonce is not None:
            out["nonce"] = self.nonce
        if self.storage:
            out["storage"] = {
                encode_b256(key): encode_b256(self.storage[key]) for key in sorted(self.storage)
            }
        return out


def _accounts_from_json(value: Any) -> dict[str, AccountState]:
    value = _expect_object(value)
    return {parse_address(addr): AccountState.from_json(state) for addr, state in value.items()}


def _accounts_to_json(accounts: dict[str, AccountState]) -> dict[str, Any]:
    return {addr: accounts[addr].to_json() for addr in sorted(accounts)}


@dataclass
class PreStateMode:
    """Default mode: the accounts needed to execute a transaction."""

    accounts: dict[str, AccountState] = field(default_factory=dict)

    @classmethod
    def from_json(cls, data: Any) -> PreStateMode:
        return cls(_accounts_from_json(data))

    def to_json(self) -> dict[str, Any]:
        return _accounts_to_json(self.accounts)


@dataclass
class DiffMode:
    """Diff mode: account states before and after a transaction."""

    post: dict[str, AccountState] = field(default_factory=dict)
    pre: dict[str, AccountState] = field(default_factory=dict)

    def retain_changed(self) -> DiffMode:
        """Drop accounts whose pre and post states are equal from both sets."""
        for address in list(self.pre):
            if address in self.post and self.post[address] == self.pre[address]:
                del self.post[address]
                del self.pre[address]
        return self

    def remove_zero_storage_values(self) -> None:
        """Remove zero storage values from every account in both sets."""
        for state in (*self.pre.values(), *self.post.values()):
            state.storage = {k: v for k, v in state.storage.items() if v != _ZERO_WORD}

    @classmethod
    def from_json(cls, data: Any) -> DiffMode:
        data = _expect_object(data)
        unknown = set(data) - {"post", "pre"}
        if unknown:
            raise ValueError(f"unknown field `{sorted(unknown)[0]}`")
        for key in ("post", "pre"):
            if key not in data:
                raise ValueError(f"missing field `{key}`")
        return cls(post=_accounts_from_json(data["post"]), pre=_accounts_from_json(data["pre"]))

    def to_json(self) -> dict[str, Any]:
        return {"post": _accounts_to_json(self.post), "pre": _accounts_to_json(self.pre)}


def pre_state_frame_from_json(data: Any) -> PreStateMode | DiffMode:
    """Read a prestate tracer result, trying default mode before diff mode."""
    try:
        return PreStateMode.from_json(data)
    except ValueError:
        pass
    try:
        return DiffMode.from_json(data)
    except ValueError as exc:
        raise ValueError("data did not match any variant of PreStateFrame") from exc


class DiffStateKind(enum.Enum):
    """Which set of a :class:`DiffMode` is meant."""

    PRE = "pre"
    POST = "post"

    def is_pre(self) -> bool:
        return self is DiffStateKind.PRE

    def is_post(self) -> bool:
        return self is DiffStateKind.POST


class AccountChangeKind(enum.Enum):
    """How an account changed."""

    MODIFY = "Modify"
    CREATE = "Create"
    SELF_DESTRUCT = "SelfDestruct"

    @classmethod
    def default(cls) -> AccountChangeKind:
        return cls.MODIFY

    def is_created(self) -> bool:
        return self is AccountChangeKind.CREATE

    def is_modified(self) -> bool:
        return self is AccountChangeKind.MODIFY

    def is_selfdestruct(self) -> bool:
        return self is AccountChangeKind.SELF_DESTRUCT


@dataclass
class PreStateConfig:
    """Prestate tracer config; ``diff_mode`` selects diff output."""

    diff_mode: bool | None = None

    def is_diff_mode(self) -> bool:
        return bool(self.diff_mode)

    def is_default_mode(self) -> bool:
        return not self.is_diff_mode()

    @classmethod
    def from_json(cls, data: Any) -> PreStateConfig:
        data = _expect_object(data)
        value = data.get("diffMode")
        if value is not None and not isinstance(value, bool):
            raise ValueError(f"diffMode must be a boolean, got {value!r}")
        return cls(diff_mode=value)

    def to_json(self) -> dict[str, Any]:
        return {} if self.diff_mode is None else {"diffMode": self.diff_mode}