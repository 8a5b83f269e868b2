import pytest

from ethrpc.trace_filter import TraceFilter, TraceFilterMode

ADDR_D8 = "0xd8dA6BF26964aF9D7eEd9e03E53415D37aA96045"
ADDR_16 = "0x160f5f00288e9e1cc8655b327e081566e580a71d"


def test_parse_filter():
    trace_filter = TraceFilter.from_json({"fromBlock": "0x3", "toBlock": "0x5"})
    assert trace_filter.from_block == 3
    assert trace_filter.to_block == 5
    assert trace_filter.mode is TraceFilterMode.UNION


def test_filter_matcher_addresses_unspecified():
    matcher = TraceFilter.from_json({"fromBlock": "0x3", "toBlock": "0x5"}).matcher()
    assert matcher.matches(ADDR_D8, None)
    assert matcher.matches(ADDR_16, None)
    assert matcher.matches(ADDR_D8, ADDR_16)
    assert matcher.matches(ADDR_16, ADDR_D8)


def test_filter_matcher_from_address():
    matcher = TraceFilter.from_json(
        {"fromBlock": "0x3", "toBlock": "0x5", "fromAddress": [ADDR_D8]}
    ).matcher()
    assert matcher.matches(ADDR_D8, None)
    assert not matcher.matches(ADDR_16, None)
    assert matcher.matches(ADDR_D8, ADDR_16)
    assert not matcher.matches(ADDR_16, ADDR_D8)


def test_filter_matcher_to_address():
    matcher = TraceFilter.from_json(
        {"fromBlock": "0x3", "toBlock": "0x5", "toAddress": [ADDR_D8]}
    ).matcher()
    assert matcher.matches(ADDR_16, ADDR_D8)
    assert not matcher.matches(ADDR_16, None)
    assert not matcher.matches(ADDR_D8, ADDR_16)


def test_filter_matcher_both_addresses_union():
    matcher = TraceFilter.from_json(
        {
            "fromBlock": "0x3",
            "toBlock": "0x5",
            "fromAddress": [ADDR_16],
            "toAddress": [ADDR_D8],
        }
    ).matcher()
    assert matcher.matches(ADDR_16, ADDR_D8)
    assert matcher.matches(ADDR_16, None)
    assert matcher.matches(ADDR_D8, ADDR_D8)
    assert not matcher.matches(ADDR_D8, ADDR_16)


def test_filter_matcher_both_addresses_intersection():
    matcher = TraceFilter.from_json(
        {
            "fromBlock": "0x3",
            "toBlock": "0x5",
            "fromAddress": [ADDR_16],
            "toAddress": [ADDR_D8],
            "mode": "intersection",
        }
    ).matcher()
    assert matcher.matches(ADDR_16, ADDR_D8)
    assert not matcher.matches(ADDR_16, None)
    assert not matcher.matches(ADDR_D8, ADDR_D8)
    assert not matcher.matches(ADDR_D8, ADDR_16)


def test_unknown_field_rejected():
    with pytest.raises(ValueError):
        TraceFilter.from_json({"fromBlock": "0x3", "toBlock": "0x5", "extra": 1})


def test_missing_block_rejected():
    with pytest.raises(ValueError):
        TraceFilter.from_json({"toBlock": "0x5"})


def test_number_blocks_and_null():
    trace_filter = TraceFilter.from_json({"fromBlock": 3, "toBlock": None, "count": 7})
    assert (trace_filter.from_block, trace_filter.to_block, trace_filter.count) == (3, None, 7)


def test_round_trip():
    trace_filter = TraceFilter(
        from_block=1,
        to_block=2,
        from_address=(ADDR_D8,),
        to_address=(ADDR_16,),
        mode=TraceFilterMode.INTERSECTION,
        after=4,
        count=5,
    )
    data = trace_filter.to_json()
    assert data["fromBlock"] == "0x1"
    assert data["fromAddress"] == [ADDR_D8.lower()]
    assert data["mode"] == "intersection"
    assert TraceFilter.from_json(data) == trace_filter