"""
Typed error classes for the Python SDK.

These are raised by rpc/http, rpc/rest, tx/send and the domain managers so
callers can catch specific failure modes while still being able to catch the
base `ChertSdkError`.

Kinds:
  - TransportError       marshal / send / decode failures (never retried)
  - RpcError             well-formed JSON-RPC error object from the node
  - ResponseShapeError   successful response with a missing/mistyped payload
  - PreconditionError    local checks, e.g. no private key available to sign
  - TxError              terminal non-success transaction status
  - ConfirmationTimeoutError
                         confirmation budget exhausted; the tx may still land
  - CancelledError       caller-supplied context cancelled or past deadline
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Literal, Mapping, Optional, Tuple, Type, Union

__all__ = [
    "ChertSdkError",
    "TransportError",
    "RpcError",
    "ResponseShapeError",
    "PreconditionError",
    "TxError",
    "ConfirmationTimeoutError",
    "CancelledError",
    "APIError",
    "JsonRpcCode",
    "TransportStage",
    "from_jsonrpc_error",
    "expect_field",
]


class ChertSdkError(Exception):
    """Base class for all SDK errors."""


class JsonRpcCode(IntEnum):
    # JSON-RPC 2.0 standard codes
    PARSE_ERROR = -32700
    INVALID_REQUEST = -32600
    METHOD_NOT_FOUND = -32601
    INVALID_PARAMS = -32602
    INTERNAL_ERROR = -32603

    # Server errors (implementation-defined range: -32099 to -32000)
    SERVER_ERROR = -32000

    # Common custom extensions (kept as hints)
    RATE_LIMITED = -32001
    UNAUTHORIZED = -32002
    TX_NOT_FOUND = -32004
    INSUFFICIENT_FUNDS = -32010
    TX_REJECTED = -32011


TransportStage = Literal["marshal", "send", "decode"]


@dataclass(slots=True)
class TransportError(ChertSdkError):
    """Raised when the request could not be marshaled, sent, or decoded."""

    stage: TransportStage
    message: str
    method: Optional[str] = None
    http_status: Optional[int] = None
    detail: Optional[str] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        parts = [f"transport[{self.stage}] {self.message}"]
        if self.method:
            parts.append(f"method={self.method}")
        if self.http_status is not None:
            parts.append(f"http={self.http_status}")
        if self.detail:
            parts.append(f"detail={self.detail}")
        return " ".join(parts)


@dataclass(slots=True)
class RpcError(ChertSdkError):
    """Raised when a JSON-RPC call returns an error object."""

    code: int
    message: str
    data: Optional[Any] = None
    method: Optional[str] = None
    request_id: Optional[Any] = None
    http_status: Optional[int] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        parts = [f"JSON-RPC error {self.code}: {self.message}"]
        if self.method:
            parts.append(f"method={self.method}")
        if self.request_id is not None:
            parts.append(f"id={self.request_id}")
        if self.http_status is not None:
            parts.append(f"http={self.http_status}")
        if self.data is not None:
            parts.append(f"data={self.data!r}")
        return " ".join(parts)

    @property
    def code_enum(self) -> Optional[JsonRpcCode]:
        try:
            return JsonRpcCode(self.code)
        except ValueError:
            return None


@dataclass(slots=True)
class ResponseShapeError(ChertSdkError):
    """
    Raised when a successful response lacks an expected field or carries the
    wrong type. Never replaced by a default/zero value.
    """

    message: str
    method: Optional[str] = None
    field: Optional[str] = None
    payload: Optional[Any] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        where = []
        if self.method:
            where.append(f"method={self.method}")
        if self.field:
            where.append(f"field={self.field}")
        where_s = (" [" + ", ".join(where) + "]") if where else ""
        return f"{self.message}{where_s}"


@dataclass(slots=True)
class PreconditionError(ChertSdkError):
    """Raised for local precondition failures (fatal, not retried)."""

    message: str

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.message


@dataclass(slots=True)
class TxError(ChertSdkError):
    """
    Raised when a submitted transaction reaches a terminal non-success status.

    Fields:
      - message: human-readable description
      - tx_hash: hash of the transaction
      - status: terminal status observed ("failed" / "rejected")
      - transaction: the last Transaction snapshot fetched from the node
    """

    message: str
    tx_hash: Optional[str] = None
    status: Optional[str] = None
    transaction: Optional[Any] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        suffix = f" tx={self.tx_hash}" if self.tx_hash else ""
        return f"TxError{suffix}: {self.message}"


@dataclass(slots=True)
class ConfirmationTimeoutError(ChertSdkError):
    """
    Raised when no terminal status was observed within the polling budget.

    The outcome is unknown at this point: the transaction may still be
    confirmed (or fail) later on the node.
    """

    tx_hash: str
    timeout_s: float
    last_status: Optional[str] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        last = f", last_status={self.last_status}" if self.last_status else ""
        return (
            f"transaction confirmation timeout (tx={self.tx_hash}, "
            f"timeout_s={self.timeout_s}{last}); final status unknown"
        )


@dataclass(slots=True)
class CancelledError(ChertSdkError):
    """Raised when the caller's context was cancelled or hit its deadline."""

    reason: str = "context cancelled"

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.reason


@dataclass(slots=True)
class APIError(ChertSdkError):
    """Error object returned by the node's auxiliary REST endpoints."""

    code: str
    message: str
    data: Optional[Any] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"API error {self.code}: {self.message}"


def from_jsonrpc_error(
    err_obj: Mapping[str, Any],
    *,
    method: Optional[str] = None,
    request_id: Optional[Any] = None,
    http_status: Optional[int] = None,
) -> RpcError:
    """
    Convert a JSON-RPC error object into RpcError.

    `err_obj` should resemble: {"code": int, "message": str, "data": any?}
    """
    return RpcError(
        code=int(err_obj.get("code", JsonRpcCode.SERVER_ERROR)),
        message=str(err_obj.get("message", "Unknown JSON-RPC error")),
        data=err_obj.get("data"),
        method=method,
        request_id=request_id,
        http_status=http_status,
    )


def expect_field(
    result: Any,
    key: str,
    *,
    what: str,
    method: Optional[str] = None,
    expected: Union[Type[Any], Tuple[Type[Any], ...]] = str,
) -> Any:
    """
    Pull `key` out of a mapping-shaped RPC result.

    Raises ResponseShapeError("invalid <what> response") when the result is not
    a mapping, the key is absent, the value has the wrong type, or a string
    value is empty.
    """
    if not isinstance(result, Mapping):
        raise ResponseShapeError(f"invalid {what} response", method=method, field=key, payload=result)
    value = result.get(key)
    if not isinstance(value, expected) or (isinstance(value, str) and not value):
        raise ResponseShapeError(f"invalid {what} response", method=method, field=key, payload=dict(result))
    return value

