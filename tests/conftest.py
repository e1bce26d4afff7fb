"""
Shared pytest fixtures for the Chert SDK tests:
- FakeRpc: in-memory JSON-RPC stub with scripted responses
- tx_json: builder for node-shaped transaction snapshots
- rpc_url / config: endpoint wired to respx-mocked HTTP
"""
from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional, Tuple, Union

import pytest

from chert_sdk.config import ClientConfig
from chert_sdk.rpc.http import decode_result

Scripted = Union[Any, BaseException, Callable[[Any], Any]]


class FakeRpc:
    """
    Minimal JSON-RPC stub. Each method has a queue of scripted replies; the
    last reply repeats once the queue is drained. A reply may be a value, an
    exception instance (raised), or a callable taking `params`.
    """

    def __init__(self, replies: Optional[Dict[str, List[Scripted]]] = None) -> None:
        self.calls: List[Tuple[str, Any]] = []
        self._replies: Dict[str, List[Scripted]] = {k: list(v) for k, v in (replies or {}).items()}

    def on(self, method: str, *replies: Scripted) -> "FakeRpc":
        self._replies.setdefault(method, []).extend(replies)
        return self

    def call(self, method: str, params: Any = None, *, result_type: Any = None, ctx: Any = None) -> Any:
        self.calls.append((method, params))
        if ctx is not None:
            ctx.check()
        queue = self._replies.get(method)
        if not queue:
            raise AssertionError(f"unexpected RPC method {method!r}")
        reply = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(reply, BaseException):
            raise reply
        if callable(reply):
            reply = reply(params)
        return decode_result(reply, result_type, method=method)

    def methods(self) -> List[str]:
        return [m for (m, _p) in self.calls]

    def count(self, method: str) -> int:
        return self.methods().count(method)


def make_tx_json(
    tx_hash: str = "0xabc",
    status: str = "pending",
    *,
    sender: str = "chert_" + "a" * 40,
    to: str = "chert_" + "b" * 40,
    amount: str = "1.5",
    fee: str = "0.01",
    block_height: Optional[int] = None,
    nonce: int = 0,
) -> Dict[str, Any]:
    out: Dict[str, Any] = {
        "hash": tx_hash,
        "from": sender,
        "to": to,
        "amount": amount,
        "fee": fee,
        "status": status,
        "timestamp": "2024-01-01T00:00:00Z",
        "nonce": nonce,
    }
    if block_height is not None:
        out["block_height"] = block_height
    return out


@pytest.fixture
def fake_rpc() -> FakeRpc:
    return FakeRpc()


@pytest.fixture
def tx_json() -> Callable[..., Dict[str, Any]]:
    return make_tx_json


@pytest.fixture
def rpc_url() -> str:
    return "http://localhost:9999/rpc"


@pytest.fixture
def config(rpc_url: str) -> ClientConfig:
    return ClientConfig(endpoint=rpc_url, network="testnet", timeout=5.0, api_key="secret-token")
