"""Result of the geth ``noopTracer``: an empty object."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class NoopFrame:
    """An empty frame, written as ``{}``."""

    @classmethod
    def from_json(cls, data: Any) -> NoopFrame:
        if not isinstance(data, dict):
            raise ValueError(f"expected an object, got {type(data).__name__}")
        if data:
            raise ValueError(f"expected an empty object, got keys {sorted(data)}")
        return cls()

    def to_json(self) -> dict[str, Any]:
        return {}