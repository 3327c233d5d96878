"""
Classes to interact with a NEO 2 node over its JSON-RPC API.
"""
from .noderpc import (
    NeoRpcClient,
    JsonRpcError,
    HttpStatusError,
    NoNodeAvailableError,
    Block,
    Transaction,
    Vout,
    Balance,
)

__all__ = [
    "NeoRpcClient",
    "JsonRpcError",
    "HttpStatusError",
    "NoNodeAvailableError",
    "Block",
    "Transaction",
    "Vout",
    "Balance",
]
