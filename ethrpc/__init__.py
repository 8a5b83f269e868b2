"""Ethereum JSON-RPC value types: transactions, requests, withdrawals, access lists,
trace filters, parity trace actions, and geth tracer frames and options."""

__version__ = "0.1.0"