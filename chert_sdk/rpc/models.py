"""
JSON-RPC 2.0 envelope models.

Outbound requests are assembled as plain dicts by the HTTP client (see
rpc/http.py); these models validate inbound envelopes and give tests a typed
view of what went over the wire.

Validation:
- A response must carry `result` (possibly null) or a non-null `error`.
- When both are present the error wins.
"""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, model_validator

JSONRPC_VERSION = "2.0"


class JsonRpcRequest(BaseModel):
    model_config = ConfigDict(frozen=True)
    jsonrpc: Literal["2.0"] = JSONRPC_VERSION
    method: str
    params: Optional[Union[List[Any], Dict[str, Any]]] = None
    id: Optional[Union[int, str]] = None


class JsonRpcError(BaseModel):
    model_config = ConfigDict(frozen=True)
    code: int
    message: str
    data: Optional[Any] = None


class JsonRpcResponse(BaseModel):
    model_config = ConfigDict(frozen=True)
    jsonrpc: Optional[str] = JSONRPC_VERSION
    result: Optional[Any] = None
    error: Optional[JsonRpcError] = None
    id: Optional[Union[int, str]] = None

    @model_validator(mode="after")
    def _result_or_error(self) -> "JsonRpcResponse":
        if self.error is None and "result" not in self.model_fields_set:
            raise ValueError("response carries neither 'result' nor 'error'")
        return self

    @property
    def is_error(self) -> bool:
        return self.error is not None


__all__ = ["JSONRPC_VERSION", "JsonRpcRequest", "JsonRpcError", "JsonRpcResponse"]
