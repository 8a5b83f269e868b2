[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ethrpc"
version = "0.1.0"
description = "Ethereum JSON-RPC value types with exact JSON encoding: transactions, requests, withdrawals, access lists, trace filters, parity trace actions and geth tracer frames and options."
requires-python = ">=3.10"
dependencies = []
keywords = ["ethereum", "json-rpc", "rpc", "trace", "geth", "parity", "transaction"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["ethrpc"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
