import json

import pytest

from ethrpc.access_list import AccessList, AccessListItem, AccessListWithGasUsed

ZERO = "0x" + "00" * 20


def _two_zero_items():
    return AccessList(
        (
            AccessListItem(address=ZERO, storage_keys=(0,)),
            AccessListItem(address=ZERO, storage_keys=(0,)),
        )
    )


def test_access_list_serde():
    access_list = _two_zero_items()
    text = json.dumps(access_list.to_json())
    assert AccessList.from_json(json.loads(text)) == access_list


def test_access_list_with_gas_used():
    value = AccessListWithGasUsed(access_list=_two_zero_items(), gas_used=100)
    text = json.dumps(value.to_json())
    assert AccessListWithGasUsed.from_json(json.loads(text)) == value


def test_item_wire_form():
    item = AccessListItem(address=ZERO, storage_keys=(0,))
    assert item.to_json() == {"address": ZERO, "storageKeys": ["0x0"]}


def test_with_gas_used_wire_keys():
    value = AccessListWithGasUsed(access_list=_two_zero_items(), gas_used=100)
    data = value.to_json()
    assert set(data) == {"accessList", "gasUsed"}
    assert data["gasUsed"] == "0x64"


def test_flatten_and_flattened():
    other = "0x" + "11" * 20
    access_list = AccessList(
        (
            AccessListItem(address=ZERO, storage_keys=(1, 2)),
            AccessListItem(address=other, storage_keys=()),
        )
    )
    assert list(access_list.flatten()) == [(ZERO, (1, 2)), (other, ())]
    assert access_list.flattened() == [(ZERO, [1, 2]), (other, [])]
    assert len(access_list) == 2


def test_items_are_hashable_and_equal():
    a = AccessListItem(address=ZERO.upper().replace("0X", "0x"), storage_keys=[3])
    b = AccessListItem(address=ZERO, storage_keys=(3,))
    assert a == b
    assert hash(a) == hash(b)


def test_missing_storage_keys_is_error():
    with pytest.raises(ValueError, match="storageKeys"):
        AccessListItem.from_json({"address": ZERO})


def test_non_list_access_list_is_error():
    with pytest.raises(ValueError):
        AccessList.from_json({"address": ZERO})