import pytest

from ethrpc.parity_action import (
    ActionType,
    CallAction,
    CallOutput,
    CallType,
    CreateAction,
    CreateOutput,
    RewardAction,
    RewardType,
    SelfdestructAction,
    TraceType,
    action_kind,
    parse_action,
    parse_trace_output,
    set_output_gas_used,
)

CALL_ACTION = {
    "from": "0xc77820eef59629fc8d88154977bc8de8a1b2f4ae",
    "callType": "call",
    "gas": "0x4a0d00",
    "input": "0x12",
    "to": "0x4f4495243837681061c4743b74b3eedf548d56a5",
    "value": "0x0",
}

SELFDESTRUCT_ACTION = {
    "address": "0x66e29f0b6b1b07071f2fde4345d512386cb66f5f",
    "refundAddress": "0x66e29f0b6b1b07071f2fde4345d512386cb66f5f",
    "balance": "0x244b",
}

CALL_RESULT = {
    "gasUsed": "0x9daf",
    "output": "0x000000000000000000000000000000000000000000000000011c37937e080000",
}


def test_call_action_round_trip_keeps_key_order():
    action = CallAction.from_json(CALL_ACTION)
    assert action.call_type is CallType.CALL
    assert action.input == b"\x12"
    out = action.to_json()
    assert out == CALL_ACTION
    assert list(out) == ["from", "callType", "gas", "input", "to", "value"]


def test_call_action_gas_encoding():
    action = CallAction(
        from_address="0x4f4495243837681061c4743b74b3eedf548d56a5",
        call_type=CallType.DELEGATE_CALL,
        gas=3148955,
        input=b"",
        to="0x99b5fa03a5ea4315725c43346e55a6a6fbd94098",
        value=0,
    )
    out = action.to_json()
    assert out["gas"] == "0x300c9b"
    assert out["callType"] == "delegatecall"
    assert out["value"] == "0x0"


def test_create_action_gas_encoding_and_round_trip():
    action = CreateAction(
        from_address="0x4f4495243837681061c4743b74b3eedf548d56a5",
        gas=3438907,
        init=bytes.fromhex("6080604052"),
        value=0,
    )
    out = action.to_json()
    assert out["gas"] == "0x34793b"
    assert CreateAction.from_json(out) == action


def test_selfdestruct_parsed_from_suicide_and_selfdestruct():
    first = parse_action("suicide", SELFDESTRUCT_ACTION)
    second = parse_action("selfdestruct", SELFDESTRUCT_ACTION)
    assert isinstance(first, SelfdestructAction)
    assert first == second
    assert action_kind(first) is ActionType.SELFDESTRUCT
    assert action_kind(first).value == "suicide"
    assert first.to_json() == SELFDESTRUCT_ACTION


def test_action_type_alias():
    assert ActionType("selfdestruct") is ActionType.SELFDESTRUCT
    assert ActionType("suicide") is ActionType.SELFDESTRUCT


def test_parse_action_unknown_type():
    with pytest.raises(ValueError):
        parse_action("explode", CALL_ACTION)


def test_parse_action_call_and_kind():
    action = parse_action("call", CALL_ACTION)
    assert isinstance(action, CallAction)
    assert action_kind(action) is ActionType.CALL


def test_reward_action_round_trip():
    data = {
        "author": "0x4f4495243837681061c4743b74b3eedf548d56a5",
        "rewardType": "uncle",
        "value": "0x244b",
    }
    action = parse_action("reward", data)
    assert isinstance(action, RewardAction)
    assert action.reward_type is RewardType.UNCLE
    assert action_kind(action) is ActionType.REWARD
    assert action.to_json() == data


def test_call_action_missing_field():
    data = dict(CALL_ACTION)
    del data["callType"]
    with pytest.raises(ValueError):
        CallAction.from_json(data)


def test_call_action_bad_call_type():
    data = dict(CALL_ACTION, callType="jump")
    with pytest.raises(ValueError):
        CallAction.from_json(data)


def test_trace_type_names():
    assert TraceType("vmTrace") is TraceType.VM_TRACE
    assert TraceType("stateDiff") is TraceType.STATE_DIFF
    with pytest.raises(ValueError):
        TraceType("vm_trace")


def test_parse_call_output():
    output = parse_trace_output(CALL_RESULT)
    assert isinstance(output, CallOutput)
    assert output.to_json() == CALL_RESULT


def test_parse_create_output():
    data = {
        "address": "0x7eb6c6c1db08c0b9459a68cfdcedab64f319c138",
        "code": "0x6080",
        "gasUsed": "0x2cb4a",
    }
    output = parse_trace_output(data)
    assert isinstance(output, CreateOutput)
    assert output.gas_used == 183114
    assert output.to_json() == data


def test_call_output_encoding():
    assert CallOutput(gas_used=32364, output=b"").to_json() == {
        "gasUsed": "0x7e6c",
        "output": "0x",
    }


def test_parse_trace_output_rejects_other_shapes():
    with pytest.raises(ValueError):
        parse_trace_output({"gasUsed": "0x1"})


def test_set_output_gas_used():
    call = parse_trace_output(CALL_RESULT)
    set_output_gas_used(call, 32364)
    assert call.gas_used == 32364
    create = CreateOutput(gas_used=1)
    set_output_gas_used(create, 183114)
    assert create.gas_used == 183114
    with pytest.raises(ValueError):
        set_output_gas_used(create, -1)