import json

import pytest

from ethrpc.withdrawal import GWEI_TO_WEI, Withdrawal


def _reference_input():
    entries = [
        '{"index":"0x%x","validatorIndex":"0x%x",'
        '"address":"0x%040x","amount":"0x1"}' % (i, i, 0x1000 + i)
        for i in range(16)
    ]
    return "[" + ",".join(entries) + "]"


def test_withdrawal_serde_roundtrip():
    text = _reference_input()
    withdrawals = [Withdrawal.from_json(item) for item in json.loads(text)]
    assert len(withdrawals) == 16
    assert withdrawals[10].index == 10
    assert withdrawals[10].validator_index == 10
    assert withdrawals[10].address == "0x000000000000000000000000000000000000100a"
    assert withdrawals[10].amount == 1
    serialized = json.dumps([w.to_json() for w in withdrawals], separators=(",", ":"))
    assert serialized == text


def test_amount_wei():
    assert Withdrawal(amount=1).amount_wei() == GWEI_TO_WEI
    assert Withdrawal(amount=3).amount_wei() == 3 * GWEI_TO_WEI


def test_address_is_normalised():
    w = Withdrawal(address="0xd8dA6BF26964aF9D7eEd9e03E53415D37aA96045")
    assert w.address == "0xd8da6bf26964af9d7eed9e03e53415d37aa96045"


def test_beacon_api_roundtrip():
    w = Withdrawal(index=5, validator_index=7, address="0x" + "11" * 20, amount=42)
    data = w.to_beacon_api()
    assert data["index"] == "5"
    assert data["validator_index"] == "7"
    assert data["amount"] == "42"
    assert Withdrawal.from_beacon_api(data) == w


def test_beacon_api_rejects_hex():
    data = {
        "index": "0x1",
        "validator_index": "1",
        "address": "0x" + "11" * 20,
        "amount": "1",
    }
    with pytest.raises(ValueError):
        Withdrawal.from_beacon_api(data)


def test_from_json_missing_field():
    with pytest.raises(ValueError, match="validatorIndex"):
        Withdrawal.from_json({"index": "0x0", "address": "0x" + "00" * 20, "amount": "0x1"})


def test_from_json_rejects_overflow():
    data = {
        "index": "0x10000000000000000",
        "validatorIndex": "0x0",
        "address": "0x" + "00" * 20,
        "amount": "0x1",
    }
    with pytest.raises(ValueError):
        Withdrawal.from_json(data)