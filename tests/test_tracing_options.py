import json
from datetime import timedelta

import pytest

from ethrpc.call_tracer import CallConfig
from ethrpc.pre_state import PreStateConfig
from ethrpc.tracing_options import (
    GethDebugBuiltInTracerType,
    GethDebugTracerConfig,
    GethDebugTracingCallOptions,
    GethDebugTracingOptions,
    GethDefaultTracingOptions,
    parse_tracer_type,
)


def _compact(value):
    return json.dumps(value, separators=(",", ":"))


def test_tracer_config():
    opts = GethDebugTracingOptions.from_json(json.loads('{"tracer": "callTracer"}'))
    assert opts.tracer == GethDebugBuiltInTracerType.CALL_TRACER
    assert opts.tracer_config.into_call_config() == CallConfig()
    assert opts.tracer_config.into_pre_state_config() == PreStateConfig()


def test_memory_capture():
    config = GethDefaultTracingOptions()
    assert not config.is_memory_enabled()
    config.disable_memory = False
    assert config.is_memory_enabled()
    config.enable_memory = False
    assert not config.is_memory_enabled()


def test_return_data_capture():
    config = GethDefaultTracingOptions()
    assert not config.is_return_data_enabled()
    config.disable_return_data = False
    assert config.is_return_data_enabled()
    config.enable_return_data = False
    assert not config.is_return_data_enabled()


def test_stack_and_storage_enabled_by_default():
    config = GethDefaultTracingOptions()
    assert config.is_stack_enabled()
    assert config.is_storage_enabled()
    changed = config.with_disable_stack(True).with_disable_storage(True)
    assert not changed.is_stack_enabled()
    assert not changed.is_storage_enabled()
    assert config.is_stack_enabled()


def test_serialize_call_trace():
    opts = GethDebugTracingCallOptions()
    opts.tracing_options.config.disable_storage = False
    opts.tracing_options.tracer = GethDebugBuiltInTracerType.CALL_TRACER
    opts.tracing_options.tracer_config = GethDebugTracerConfig(
        CallConfig(only_top_call=True, with_log=True).to_json()
    )
    assert _compact(opts.to_json()) == (
        '{"disableStorage":false,"tracer":"callTracer",'
        '"tracerConfig":{"onlyTopCall":true,"withLog":true}}'
    )


def test_serialize_four_byte_trace():
    opts = GethDebugTracingCallOptions()
    opts.tracing_options.tracer = GethDebugBuiltInTracerType.FOUR_BYTE_TRACER
    assert _compact(opts.to_json()) == '{"tracer":"4byteTracer"}'


def test_serialize_noop_trace():
    opts = GethDebugTracingCallOptions()
    opts.tracing_options.tracer = GethDebugBuiltInTracerType.NOOP_TRACER
    assert _compact(opts.to_json()) == '{"tracer":"noopTracer"}'


def test_serialize_pre_state_trace():
    opts = GethDebugTracingCallOptions()
    opts.tracing_options.config.disable_storage = False
    opts.tracing_options.tracer = GethDebugBuiltInTracerType.PRE_STATE_TRACER
    opts.tracing_options.tracer_config = GethDebugTracerConfig(
        PreStateConfig(diff_mode=True).to_json()
    )
    assert _compact(opts.to_json()) == (
        '{"disableStorage":false,"tracer":"prestateTracer","tracerConfig":{"diffMode":true}}'
    )


def test_parse_tracer_type_custom_js():
    assert parse_tracer_type("{ result: function() {} }") == "{ result: function() {} }"
    assert parse_tracer_type("prestateTracer") == GethDebugBuiltInTracerType.PRE_STATE_TRACER


def test_parse_tracer_type_rejects_non_string():
    with pytest.raises(ValueError):
        parse_tracer_type(5)


def test_with_timeout_in_milliseconds():
    opts = GethDebugTracingOptions().with_timeout(timedelta(seconds=1, microseconds=500_900))
    assert opts.timeout == "1500ms"
    assert opts.to_json() == {"timeout": "1500ms"}


def test_with_call_and_prestate_config():
    opts = GethDebugTracingOptions().with_call_config(CallConfig().enable_only_top_call())
    assert opts.tracer_config.into_json() == {"onlyTopCall": True}
    assert opts.tracer_config.into_call_config() == CallConfig(only_top_call=True)
    opts = opts.with_prestate_config(PreStateConfig(diff_mode=True))
    assert opts.tracer_config.into_pre_state_config().is_diff_mode()


def test_tracer_config_invalid_shape():
    with pytest.raises(ValueError):
        GethDebugTracerConfig(5).into_call_config()


def test_tracing_options_roundtrip():
    raw = {
        "enableMemory": True,
        "disableStack": True,
        "limit": 10,
        "tracer": "myTracer",
        "tracerConfig": {"x": 1},
        "timeout": "5s",
    }
    opts = GethDebugTracingOptions.from_json(raw)
    assert opts.config.limit == 10
    assert opts.tracer == "myTracer"
    assert opts.to_json() == raw


def test_call_options_overrides_roundtrip():
    raw = {
        "tracer": "callTracer",
        "stateOverrides": {"0x0000000000000000000000000000000000000001": {"balance": "0x1"}},
        "blockOverrides": {"number": "0x5"},
    }
    opts = GethDebugTracingCallOptions.from_json(raw)
    assert opts.block_overrides == {"number": "0x5"}
    assert opts.to_json() == raw


def test_invalid_bool_option():
    with pytest.raises(ValueError):
        GethDefaultTracingOptions.from_json({"debug": "yes"})