"""The ``rpc_modules`` response."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class RpcModules:
    """Available modules of a transport, mapped to their versions."""

    module_map: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_json(cls, data: Any) -> RpcModules:
        if not isinstance(data, dict):
            raise ValueError(f"expected an object, got {type(data).__name__}")
        for name, version in data.items():
            if not isinstance(version, str):
                raise ValueError(f"version of module {name!r} must be a string")
        return cls(dict(data))

    def to_json(self) -> dict[str, str]:
        return dict(self.module_map)

    def into_modules(self) -> dict[str, str]:
        """Return the mapping of module names to versions."""
        return dict(self.module_map)