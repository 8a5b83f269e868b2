# ethrpc

Python values for the Ethereum JSON-RPC interface. Each value reads from and
writes to the JSON that execution clients use. That JSON holds hex
quantities such as `"0x1a"`, 20-byte addresses, 32-byte hashes and hex byte
strings. The output keeps the same field order and leaves out the same
fields.

The package has no runtime dependencies.

## Modules

- `ethrpc.hexutil`: the encoding helpers.
  - Quantities: `encode_quantity` and `decode_quantity(text, bits)`.
  - Fixed-size values: `parse_address`, which returns lower-case `0x` hex,
    `parse_b256` and `encode_b256`.
  - Byte strings: `parse_bytes`, `encode_bytes` and `hex_no_prefix`.
  - Lenient number readers: `from_int_or_hex`, `from_int_or_hex_opt`,
    `parse_json_u256` (a number, a hex string or a decimal string) and
    `u64_hex_or_number`.
- `ethrpc.storage`: `JsonStorageKey`, which is read as a U256 and written
  back as trimmed hex. The module also has `from_bytes_to_b256`, which
  left-pads input to 32 bytes, and `deserialize_storage_map`.
- `ethrpc.withdrawal`: `Withdrawal`, with `amount_wei()`. It reads and
  writes the hex execution-API form (`from_json` / `to_json`) and the Beacon
  API form with quoted decimals and snake-case keys (`from_beacon_api` /
  `to_beacon_api`).
- `ethrpc.access_list`: `AccessListItem`, `AccessList` (with `flatten()` and
  `flattened()`) and `AccessListWithGasUsed`.
- `ethrpc.signature`: `Signature` and `Parity`. `Parity` accepts only
  `"0x0"` and `"0x1"`.
- `ethrpc.transaction`: `Transaction`, which is the RPC transaction object
  with the signature fields flattened in, and `TransactionInfo`.
- `ethrpc.typed`: `TransactionRequest`, with these parts:
  - `with_*` methods that return updated copies;
  - `into_typed_request()`, which yields a `LegacyTransactionRequest`, an
    `EIP2930TransactionRequest`, an `EIP1559TransactionRequest`, or `None`
    when both `gas_price` and `max_fee_per_gas` are set.

  The module also has `TransactionKind`, with `rlp_encode()` and
  `rlp_decode()`. `rlp_decode()` raises `RlpError` on bad input.
- `ethrpc.trace_filter`: `TraceFilter`, `TraceFilterMode` and
  `TraceFilterMatcher`. In the matcher an empty address set matches every
  address.
- `ethrpc.parity_action`: the parity-style trace pieces.
  - Enums: `TraceType`, `ActionType`, `CallType` and `RewardType`.
  - Actions: `CallAction`, `CreateAction`, `RewardAction` and
    `SelfdestructAction`. `parse_action(type_name, data)` reads one of
    them, and it accepts `"selfdestruct"` as an alias of `"suicide"`.
    `action_kind(action)` names the kind of an action.
  - Outputs: `CallOutput` and `CreateOutput`, with `parse_trace_output` and
    `set_output_gas_used`.
- `ethrpc.call_tracer`: `CallFrame`, `CallLogFrame` and `CallConfig` for
  geth's `callTracer`.
- `ethrpc.pre_state`: the prestate tracer types.
  - Account data: `AccountState`.
  - Result modes: `PreStateMode` and `DiffMode`, with `retain_changed()`
    and `remove_zero_storage_values()`. `pre_state_frame_from_json` tries
    the default mode first and then the diff mode.
  - Helpers and config: `DiffStateKind`, `AccountChangeKind` and
    `PreStateConfig`.
- `ethrpc.four_byte`: `FourByteFrame`.
- `ethrpc.noop`: `NoopFrame`, which is `{}`.
- `ethrpc.tracing_options`: the options of geth's `debug_traceTransaction`
  and `debug_traceCall`.
  - Option types: `GethDefaultTracingOptions`, `GethDebugTracingOptions` and
    `GethDebugTracingCallOptions`.
  - Tracer config: `GethDebugTracerConfig`, with `into_call_config()` and
    `into_pre_state_config()`.
  - Tracer names: `GethDebugBuiltInTracerType` and `parse_tracer_type`.
    `parse_tracer_type` returns a built-in tracer, or else the string as a
    custom tracer.
- `ethrpc.rpc`: `RpcModules`, the `rpc_modules` response.

## Usage

Most types have a `from_json` constructor and a `to_json` method. Both work
with plain Python JSON values, which are the objects `json.loads` returns and
`json.dumps` accepts.

```python
import json
from ethrpc.withdrawal import Withdrawal

raw = json.loads(
    '{"index":"0x0","validatorIndex":"0x0",'
    '"address":"0x0000000000000000000000000000000000001000","amount":"0x1"}'
)
w = Withdrawal.from_json(raw)
print(w.amount_wei())     # 1000000000
print(json.dumps(w.to_json(), separators=(",", ":")))
print(w.to_beacon_api())  # quoted decimals, snake_case keys
```

Matching addresses against a trace filter:

```python
from ethrpc.trace_filter import TraceFilter

flt = TraceFilter.from_json({
    "fromBlock": "0x3",
    "toBlock": "0x5",
    "fromAddress": ["0x160f5f00288e9e1cc8655b327e081566e580a71d"],
})
matcher = flt.matcher()
print(matcher.matches("0x160f5f00288e9e1cc8655b327e081566e580a71d", None))  # True
```

Building tracer options:

```python
from ethrpc.call_tracer import CallConfig
from ethrpc.tracing_options import GethDebugBuiltInTracerType, GethDebugTracingOptions

opts = GethDebugTracingOptions().with_tracer(
    GethDebugBuiltInTracerType.CALL_TRACER
).with_call_config(CallConfig().enable_only_top_call())
print(opts.to_json())  # {'tracer': 'callTracer', 'tracerConfig': {'onlyTopCall': True}}
```

Input that does not fit the expected format raises `ValueError`.

## What it does not do

The package has no RPC client and no command-line tool. It only models
values.

It does not have types for some whole trace results. The parity-style
actions and outputs are covered, but the following are not:

- full parity transaction traces, localized traces, `trace_call` results,
  state diffs and VM traces;
- geth's default struct-log tracer frames, untagged tracer results and
  per-block trace results.

The state and block overrides of `GethDebugTracingCallOptions` are kept as
raw JSON values and are not checked.

## Tests

```
pip install -e .[test]
pytest
```