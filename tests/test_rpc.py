import json

import pytest

from ethrpc.rpc import RpcModules

RAW = '{"txpool":"1.0","trace":"1.0","eth":"1.0","web3":"1.0","net":"1.0"}'


def test_parse_module_versions_roundtrip():
    expected = RpcModules(
        {"txpool": "1.0", "trace": "1.0", "eth": "1.0", "web3": "1.0", "net": "1.0"}
    )
    parsed = RpcModules.from_json(json.loads(RAW))
    assert parsed == expected
    assert parsed.to_json() == json.loads(RAW)


def test_into_modules():
    modules = RpcModules.from_json(json.loads(RAW))
    assert modules.into_modules()["eth"] == "1.0"
    assert len(modules.into_modules()) == 5


@pytest.mark.parametrize("bad", [{"eth": 1}, ["eth"], None])
def test_invalid(bad):
    with pytest.raises(ValueError):
        RpcModules.from_json(bad)