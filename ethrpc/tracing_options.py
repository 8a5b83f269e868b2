"""Options for geth's ``debug_traceTransaction`` and ``debug_traceCall``."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field, replace
from datetime import timedelta
from typing import Any, Union

from ethrpc.call_tracer import CallConfig
from ethrpc.hexutil import U64_MAX
from ethrpc.pre_state import PreStateConfig


def _expect_object(data: Any) -> dict:
    if not isinstance(data, dict):
        raise ValueError(f"expected an object, got {type(data).__name__}")
    return data


def _opt_bool(data: dict, key: str) -> bool | None:
    value = data.get(key)
    if value is not None and not isinstance(value, bool):
        raise ValueError(f"field `{key}` must be a boolean, got {value!r}")
    return value


def _opt_u64(data: dict, key: str) -> int | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, int) or isinstance(value, bool) or not 0 <= value <= U64_MAX:
        raise ValueError(f"field `{key}` must be a u64 number, got {value!r}")
    return value


def _opt_str(data: dict, key: str) -> str | None:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise ValueError(f"field `{key}` must be a string, got {value!r}")
    return value


class GethDebugBuiltInTracerType(enum.Enum):
    """Tracers built into geth."""

    FOUR_BYTE_TRACER = "4byteTracer"
    CALL_TRACER = "callTracer"
    PRE_STATE_TRACER = "prestateTracer"
    NOOP_TRACER = "noopTracer"


GethDebugTracerType = Union[GethDebugBuiltInTracerType, str]


def parse_tracer_type(value: Any) -> GethDebugTracerType:
    """Read a tracer name: a built-in tracer, or else a custom JavaScript tracer."""
    if not isinstance(value, str):
        raise ValueError(f"tracer must be a string, got {value!r}")
    try:
        return GethDebugBuiltInTracerType(value)
    except ValueError:
        return value


def _tracer_to_json(tracer: GethDebugTracerType) -> str:
    if isinstance(tracer, GethDebugBuiltInTracerType):
        return tracer.value
    return tracer


@dataclass(frozen=True)
class GethDebugTracerConfig:
    """A tracer's raw JSON config, with helpers to read known configs."""

    value: Any = None

    def is_null(self) -> bool:
        return self.value is None

    def into_call_config(self) -> CallConfig:
        """Read the config as a :class:`CallConfig`; null gives the default."""
        if self.value is None:
            return CallConfig()
        return CallConfig.from_json(self.value)

    def into_pre_state_config(self) -> PreStateConfig:
        """Read the config as a :class:`PreStateConfig`; null gives the default."""
        if self.value is None:
            return PreStateConfig()
        return PreStateConfig.from_json(self.value)

    def into_json(self) -> Any:
        """Return the raw JSON value."""
        return self.value


_DEFAULT_OPTION_KEYS = (
    ("enable_memory", "enableMemory"),
    ("disable_memory", "disableMemory"),
    ("disable_stack", "disableStack"),
    ("disable_storage", "disableStorage"),
    ("enable_return_data", "enableReturnData"),
    ("disable_return_data", "disableReturnData"),
    ("debug", "debug"),
)


@dataclass
class GethDefaultTracingOptions:
    """General options of the struct logger, which tracers may or may not honour."""

    enable_memory: bool | None = None
    disable_memory: bool | None = None
    disable_stack: bool | None = None
    disable_storage: bool | None = None
    enable_return_data: bool | None = None
    disable_return_data: bool | None = None
    debug: bool | None = None
    limit: int | None = None

    def with_enable_memory(self, enable: bool) -> GethDefaultTracingOptions:
        return replace(self, enable_memory=enable)

    def with_disable_memory(self, disable: bool) -> GethDefaultTracingOptions:
        return replace(self, disable_memory=disable)

    def with_disable_stack(self, disable: bool) -> GethDefaultTracingOptions:
        return replace(self, disable_stack=disable)

    def with_disable_storage(self, disable: bool) -> GethDefaultTracingOptions:
        return replace(self, disable_storage=disable)

    def with_enable_return_data(self, enable: bool) -> GethDefaultTracingOptions:
        return replace(self, enable_return_data=enable)

    def with_disable_return_data(self, disable: bool) -> GethDefaultTracingOptions:
        return replace(self, disable_return_data=disable)

    def with_debug(self, debug: bool) -> GethDefaultTracingOptions:
        return replace(self, debug=debug)

    def with_limit(self, limit: int) -> GethDefaultTracingOptions:
        return replace(self, limit=limit)

    def is_return_data_enabled(self) -> bool:
        """``enable_return_data`` wins; otherwise the negation of ``disable_return_data``."""
        if self.enable_return_data is not None:
            return self.enable_return_data
        if self.disable_return_data is not None:
            return not self.disable_return_data
        return False

    def is_memory_enabled(self) -> bool:
        """``enable_memory`` wins; otherwise the negation of ``disable_memory``."""
        if self.enable_memory is not None:
            return self.enable_memory
        if self.disable_memory is not None:
            return not self.disable_memory
        return False

    def is_stack_enabled(self) -> bool:
        return not self.disable_stack

    def is_storage_enabled(self) -> bool:
        return not self.disable_storage

    @classmethod
    def from_json(cls, data: Any) -> GethDefaultTracingOptions:
        data = _expect_object(data)
        values: dict[str, Any] = {
            attr: _opt_bool(data, key) for attr, key in _DEFAULT_OPTION_KEYS
        }
        values["limit"] = _opt_u64(data, "limit")
        return cls(**values)

    def to_json(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        for attr, key in _DEFAULT_OPTION_KEYS:
            value = getattr(self, attr)
            if value is not None:
                out[key] = value
        if self.limit is not None:
            out["limit"] = self.limit
        return out


@dataclass
class GethDebugTracingOptions:
    """Options of ``debug_traceTransaction``."""

    config: GethDefaultTracingOptions = field(default_factory=GethDefaultTracingOptions)
    tracer: GethDebugTracerType | None = None
    tracer_config: GethDebugTracerConfig = field(default_factory=GethDebugTracerConfig)
    timeout: str | None = None

    def with_tracer(self, tracer: GethDebugTracerType) -> GethDebugTracingOptions:
        return replace(self, tracer=tracer)

    def with_timeout(self, duration: timedelta) -> GethDebugTracingOptions:
        """Set the timeout as whole milliseconds, e.g. ``"1500ms"``."""
        millis = duration // timedelta(milliseconds=1)
        return replace(self, timeout=f"{millis}ms")

    def with_call_config(self, config: CallConfig) -> GethDebugTracingOptions:
        return replace(self, tracer_config=GethDebugTracerConfig(config.to_json()))

    def with_prestate_config(self, config: PreStateConfig) -> GethDebugTracingOptions:
        return replace(self, tracer_config=GethDebugTracerConfig(config.to_json()))

    @classmethod
    def from_json(cls, data: Any) -> GethDebugTracingOptions:
        data = _expect_object(data)
        tracer = data.get("tracer")
        return cls(
            config=GethDefaultTracingOptions.from_json(data),
            tracer=None if tracer is None else parse_tracer_type(tracer),
            tracer_config=GethDebugTracerConfig(data.get("tracerConfig")),
            timeout=_opt_str(data, "timeout"),
        )

    def to_json(self) -> dict[str, Any]:
        out = self.config.to_json()
        if self.tracer is not None:
            out["tracer"] = _tracer_to_json(self.tracer)
        if not self.tracer_config.is_null():
            out["tracerConfig"] = self.tracer_config.into_json()
        if self.timeout is not None:
            out["timeout"] = self.timeout
        return out


@dataclass
class GethDebugTracingCallOptions:
    """Options of ``debug_traceCall``: tracing options plus raw state and block overrides."""

    tracing_options: GethDebugTracingOptions = field(default_factory=GethDebugTracingOptions)
    state_overrides: Any = None
    block_overrides: Any = None

    @classmethod
    def from_json(cls, data: Any) -> GethDebugTracingCallOptions:
        data = _expect_object(data)
        return cls(
            tracing_options=GethDebugTracingOptions.from_json(data),
            state_overrides=data.get("stateOverrides"),
            block_overrides=data.get("blockOverrides"),
        )

    def to_json(self) -> dict[str, Any]:
        out = self.tracing_options.to_json()
        if self.state_overrides is not None:
            out["stateOverrides"] = self.state_overrides
        if self.block_overrides is not None:
            out["blockOverrides"] = self.block_overrides
        return out