"""
chert_sdk.rpc
-------------

Transport layer.

This package exposes:
- RpcClient:  JSON-RPC 2.0 client over HTTP (see .http)
- RestClient: helper for the node's auxiliary REST endpoints (see .rest)
- envelope models (see .models)

Import style:

    from chert_sdk.rpc import RpcClient
    rpc = RpcClient(url="http://localhost:8545")
"""

from __future__ import annotations

from .http import RpcClient, call_for_field, decode_result  # noqa: F401
from .models import JsonRpcError, JsonRpcRequest, JsonRpcResponse  # noqa: F401
from .rest import RestClient  # noqa: F401

__all__ = ["RpcClient", "RestClient", "call_for_field", "decode_result", "JsonRpcRequest", "JsonRpcResponse", "JsonRpcError"]
