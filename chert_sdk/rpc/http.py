"""
HTTP JSON-RPC client (sync).

- One POST per call over a shared `httpx.Client`; no retries, no caching.
- Honors a caller-supplied `Context`: a done context short-circuits before any
  I/O, and the per-request timeout never exceeds the context's remaining budget.
- Results are validated in a single step against an optional `result_type`
  (any type pydantic can validate). A mismatch is a ResponseShapeError, never a
  partially populated value.

Example:
    from chert_sdk.rpc.http import RpcClient
    from chert_sdk.types import NetworkStatus

    rpc = RpcClient("https://api.chert.com")
    status = rpc.call("getNetworkStatus", result_type=NetworkStatus)
    print(status.block_height)
"""

from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from functools import lru_cache
from itertools import count
from typing import Any, Dict, Iterator, Mapping, Optional, Sequence, Type, TypeVar, Union

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError

from ..config import ClientConfig
from ..context import Context, ensure_context
from ..errors import ResponseShapeError, TransportError, expect_field, from_jsonrpc_error
from ..version import USER_AGENT
from .models import JsonRpcRequest, JsonRpcResponse

log = logging.getLogger(__name__)

T = TypeVar("T")
Params = Union[Sequence[Any], Mapping[str, Any], None]


def _now_ms() -> int:
    return int(time.time() * 1000)


def json_default(obj: Any) -> Any:
    """`json.dumps` hook for SDK models and enums inside params."""
    if isinstance(obj, BaseModel):
        return obj.model_dump(mode="json", by_alias=True, exclude_none=True)
    if isinstance(obj, Enum):
        return obj.value
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


@lru_cache(maxsize=256)
def _adapter(tp: Any) -> TypeAdapter:
    return TypeAdapter(tp)


def decode_result(result: Any, result_type: Optional[Type[T]], *, method: Optional[str] = None) -> Any:
    """
    Validate a raw JSON result against `result_type`.

    - result_type None -> raw JSON is returned untouched
    - null result -> ResponseShapeError (no zero-value stand-ins)
    - validation failure -> ResponseShapeError
    """
    if result_type is None:
        return result
    if result is None:
        raise ResponseShapeError("empty result", method=method)
    try:
        return _adapter(result_type).validate_python(result)
    except ValidationError as e:
        name = getattr(result_type, "__name__", repr(result_type))
        log.debug("rpc %s: result does not match %s: %s", method, name, e)
        raise ResponseShapeError(
            f"result does not match {name}", method=method, payload=result
        ) from e


@dataclass
class RpcClient:
    """Synchronous JSON-RPC 2.0 client over HTTP."""

    url: str
    timeout: float = 30.0
    headers: Optional[Mapping[str, str]] = None
    client: Optional[httpx.Client] = None
    _id_counter: Iterator[int] = field(default_factory=lambda: count(start=_now_ms()), repr=False)
    _headers: Dict[str, str] = field(init=False, default_factory=dict, repr=False)
    _owns_client: bool = field(init=False, default=False, repr=False)

    def __post_init__(self) -> None:
        merged: Dict[str, str] = {
            "Content-Type": "application/json",
            "User-Agent": USER_AGENT,
        }
        if self.headers:
            merged.update(dict(self.headers))
        self._headers = merged
        if self.client is None:
            self.client = httpx.Client(timeout=self.timeout)
            self._owns_client = True

    @classmethod
    def from_config(cls, config: ClientConfig, *, client: Optional[httpx.Client] = None) -> "RpcClient":
        return cls(
            url=config.endpoint,
            timeout=config.timeout,
            headers=config.http_headers(),
            client=client,
        )

    # --- context manager -------------------------------------------------

    def __enter__(self) -> "RpcClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:  # noqa: ANN001
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP pool if this client created it."""
        if self._owns_client and self.client is not None:
            self.client.close()

    # --- public API ------------------------------------------------------

    def call(
        self,
        method: str,
        params: Params = None,
        *,
        result_type: Optional[Type[T]] = None,
        ctx: Optional[Context] = None,
    ) -> Any:
        """
        Perform a single JSON-RPC request.

        Returns the raw `result`, or an instance of `result_type` when given.

        Raises:
            CancelledError      context done before or during the call
            TransportError      marshal / send / decode failures
            RpcError            node returned a JSON-RPC error object (verbatim)
            ResponseShapeError  result does not match `result_type`
        """
        ctx = ensure_context(ctx)
        ctx.check()

        payload = self._make_payload(method, params)
        try:
            body = json.dumps(payload, separators=(",", ":"), ensure_ascii=False, default=json_default)
        except (TypeError, ValueError) as e:
            raise TransportError("marshal", "failed to marshal RPC request", method=method, detail=str(e)) from e

        log.debug("rpc -> %s id=%s", method, payload["id"])
        try:
            resp = self.client.post(
                self.url,
                content=body.encode("utf-8"),
                headers=self._headers,
                timeout=self._effective_timeout(ctx),
            )
        except httpx.TimeoutException as e:
            ctx.check()
            raise TransportError("send", "RPC request timed out", method=method, detail=str(e)) from e
        except httpx.HTTPError as e:
            raise TransportError("send", "RPC request failed", method=method, detail=str(e)) from e

        envelope = self._decode_envelope(resp, method)
        if envelope.id is not None and str(envelope.id) != str(payload["id"]):
            log.warning("rpc %s: response id %r does not echo request id %r", method, envelope.id, payload["id"])
        if envelope.is_error:
            log.debug("rpc <- %s error code=%s", method, envelope.error.code)
            raise from_jsonrpc_error(
                envelope.error.model_dump(),
                method=method,
                request_id=envelope.id,
                http_status=resp.status_code,
            )
        log.debug("rpc <- %s ok", method)
        return decode_result(envelope.result, result_type, method=method)

    # --- internals -------------------------------------------------------

    def _make_payload(self, method: str, params: Params) -> Dict[str, Any]:
        wire_params: Optional[Union[list, dict]]
        if params is None:
            wire_params = None
        elif isinstance(params, Mapping):
            wire_params = dict(params)
        elif isinstance(params, Sequence) and not isinstance(params, (str, bytes, bytearray)):
            wire_params = list(params)
        else:
            # Coerce single param into positional list
            wire_params = [params]
        req = JsonRpcRequest(method=method, params=wire_params, id=next(self._id_counter))
        return req.model_dump(by_alias=True, exclude={"params"} if wire_params is None else None)
        if isinstance(params, Mapping):
            payload["params"] = dict(params)
        elif isinstance(params, Sequence) and not isinstance(params, (str, bytes, bytearray)):
            payload["params"] = list(params)
        else:
            # Coerce single param into positional list
            payload["params"] = [params]
        return payload

    def _effective_timeout(self, ctx: Context) -> float:
        rem = ctx.remaining()
        if rem is None:
            return float(self.timeout)
        return max(min(float(self.timeout), rem), 0.001)

    def _decode_envelope(self, resp: httpx.Response, method: str) -> JsonRpcResponse:
        try:
            data = resp.json()
        except ValueError as e:
            if resp.status_code >= 400:
                raise TransportError("send", f"HTTP {resp.status_code}", method=method,
                                     http_status=resp.status_code, detail=resp.text[:256]) from e
            raise TransportError(
                "decode",
                "failed to decode RPC response",
                method=method,
                http_status=resp.status_code,
                detail=resp.text[:256],
            ) from e
        if not isinstance(data, dict):
            raise TransportError(
                "decode",
                "invalid JSON-RPC response type",
                method=method,
                http_status=resp.status_code,
                detail=type(data).__name__,
            )
        try:
            envelope = JsonRpcResponse.model_validate(data)
        except ValidationError as e:
            if resp.status_code >= 400:
                raise TransportError("send", f"HTTP {resp.status_code}", method=method,
                                     http_status=resp.status_code, detail=resp.text[:256]) from e
            raise TransportError(
                "decode", "malformed JSON-RPC response", method=method,
                http_status=resp.status_code, detail=str(e),
            ) from e
        return envelope


def call_for_field(
    rpc: Any,
    method: str,
    params: Params,
    *,
    key: str,
    what: str,
    ctx: Optional[Context] = None,
) -> str:
    """
    Call `method` and return the string field `key` of its mapping result
    (typically a transaction hash or identifier).

    Raises ResponseShapeError("invalid <what> response") when it is missing.
    """
    result = rpc.call(method, params, ctx=ctx)
    return expect_field(result, key, what=what, method=method)


__all__ = ["RpcClient", "call_for_field", "decode_result", "json_default"]
