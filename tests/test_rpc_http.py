import json

import httpx
import pytest
import respx

from chert_sdk.context import Context
from chert_sdk.errors import CancelledError, ResponseShapeError, RpcError, TransportError
from chert_sdk.rpc.http import RpcClient, call_for_field
from chert_sdk.rpc.models import JsonRpcRequest, JsonRpcResponse
from chert_sdk.types import Balance, NetworkStatus
from chert_sdk.version import USER_AGENT

URL = "http://localhost:9999/rpc"


def _sent(route) -> dict:
    return json.loads(route.calls.last.request.content)


@respx.mock
def test_call_round_trip_decodes_typed_result() -> None:
    route = respx.post(URL).respond(
        json={"jsonrpc": "2.0", "id": 1, "result": {"available": "10", "pending": "0", "total": "10"}}
    )
    with RpcClient(URL) as rpc:
        bal = rpc.call("getBalance", ["chert_" + "a" * 40], result_type=Balance)

    assert isinstance(bal, Balance)
    assert bal.total == "10"

    body = _sent(route)
    sent = JsonRpcRequest.model_validate(body)
    assert sent.method == "getBalance"
    assert body["jsonrpc"] == "2.0"
    assert body["method"] == "getBalance"
    assert body["params"] == ["chert_" + "a" * 40]
    assert isinstance(body["id"], int)
    req = route.calls.last.request
    assert req.headers["content-type"] == "application/json"
    assert req.headers["user-agent"] == USER_AGENT


@respx.mock
def test_params_none_is_omitted_and_scalar_is_wrapped() -> None:
    route = respx.post(URL).respond(json={"jsonrpc": "2.0", "id": 1, "result": 7})
    rpc = RpcClient(URL)

    assert rpc.call("getLatestBlock") == 7
    assert "params" not in _sent(route)

    rpc.call("getBlock", 42)
    assert _sent(route)["params"] == [42]

    rpc.call("governance_getProposals", {"limit": 3})
    assert _sent(route)["params"] == {"limit": 3}


@respx.mock
def test_request_ids_increase() -> None:
    route = respx.post(URL).respond(json={"jsonrpc": "2.0", "id": 1, "result": None})
    rpc = RpcClient(URL)
    rpc.call("a")
    first = _sent(route)["id"]
    rpc.call("b")
    assert _sent(route)["id"] > first


@respx.mock
def test_error_envelope_surfaces_verbatim() -> None:
    respx.post(URL).respond(
        json={"jsonrpc": "2.0", "id": 1, "error": {"code": -32010, "message": "insufficient funds", "data": {"need": "5"}}}
    )
    with pytest.raises(RpcError) as ei:
        RpcClient(URL).call("sendTransaction", [{}])

    err = ei.value
    assert err.code == -32010
    assert err.message == "insufficient funds"
    assert err.data == {"need": "5"}
    assert err.method == "sendTransaction"
    assert "JSON-RPC error -32010: insufficient funds" in str(err)


@respx.mock
def test_error_wins_over_result() -> None:
    respx.post(URL).respond(
        json={"jsonrpc": "2.0", "id": 1, "result": {"x": 1}, "error": {"code": -32000, "message": "boom"}}
    )
    with pytest.raises(RpcError):
        RpcClient(URL).call("x")


@respx.mock
def test_result_shape_mismatch_is_shape_error() -> None:
    respx.post(URL).respond(json={"jsonrpc": "2.0", "id": 1, "result": {"block_height": "not-a-number"}})
    with pytest.raises(ResponseShapeError):
        RpcClient(URL).call("getNetworkStatus", result_type=NetworkStatus)


@respx.mock
def test_null_result_with_type_is_shape_error() -> None:
    respx.post(URL).respond(json={"jsonrpc": "2.0", "id": 1, "result": None})
    with pytest.raises(ResponseShapeError):
        RpcClient(URL).call("getBalance", ["x"], result_type=Balance)


@respx.mock
def test_non_json_body_is_decode_error() -> None:
    respx.post(URL).respond(status_code=200, text="<html>oops</html>")
    with pytest.raises(TransportError) as ei:
        RpcClient(URL).call("x")
    assert ei.value.stage == "decode"


@respx.mock
def test_envelope_without_result_or_error_is_decode_error() -> None:
    respx.post(URL).respond(json={"jsonrpc": "2.0", "id": 1})
    with pytest.raises(TransportError) as ei:
        RpcClient(URL).call("x")
    assert ei.value.stage == "decode"


@respx.mock
def test_http_error_status_without_envelope_is_send_error() -> None:
    respx.post(URL).respond(status_code=502, text="bad gateway")
    with pytest.raises(TransportError) as ei:
        RpcClient(URL).call("x")
    assert ei.value.stage == "send"
    assert ei.value.http_status == 502


@respx.mock
def test_connection_failure_is_send_error() -> None:
    respx.post(URL).mock(side_effect=httpx.ConnectError("refused"))
    with pytest.raises(TransportError) as ei:
        RpcClient(URL).call("x")
    assert ei.value.stage == "send"


def test_unserializable_params_is_marshal_error() -> None:
    with respx.mock(assert_all_called=False) as mock:
        route = mock.post(URL).respond(json={"jsonrpc": "2.0", "id": 1, "result": 1})
        with pytest.raises(TransportError) as ei:
            RpcClient(URL).call("x", [object()])
        assert ei.value.stage == "marshal"
        assert not route.called


def test_cancelled_context_issues_no_request() -> None:
    ctx = Context.background().with_cancel()
    ctx.cancel()
    with respx.mock(assert_all_called=False) as mock:
        route = mock.post(URL).respond(json={"jsonrpc": "2.0", "id": 1, "result": 1})
        with pytest.raises(CancelledError):
            RpcClient(URL).call("x", ctx=ctx)
        assert not route.called


@respx.mock
def test_config_headers_carry_bearer_and_extras(config) -> None:
    route = respx.post(config.endpoint).respond(json={"jsonrpc": "2.0", "id": 1, "result": True})
    cfg = config.with_overrides(config, headers={"X-Trace": "t-1"})
    RpcClient.from_config(cfg).call("ping")

    req = route.calls.last.request
    assert req.headers["authorization"] == "Bearer secret-token"
    assert req.headers["x-trace"] == "t-1"


def test_call_for_field_requires_string_field(fake_rpc) -> None:
    fake_rpc.on("staking_delegate", {"tx_hash": "0x01"}, {"other": 1}, {"tx_hash": ""})

    assert call_for_field(fake_rpc, "staking_delegate", [{}], key="tx_hash", what="delegation") == "0x01"
    for _ in range(2):
        with pytest.raises(ResponseShapeError) as ei:
            call_for_field(fake_rpc, "staking_delegate", [{}], key="tx_hash", what="delegation")
        assert ei.value.message == "invalid delegation response"


def test_envelope_model_rules() -> None:
    ok = JsonRpcResponse.model_validate({"jsonrpc": "2.0", "id": 1, "result": None})
    assert not ok.is_error
    err = JsonRpcResponse.model_validate({"jsonrpc": "2.0", "id": 1, "error": {"code": -1, "message": "x"}})
    assert err.is_error
    with pytest.raises(ValueError):
        JsonRpcResponse.model_validate({"jsonrpc": "2.0", "id": 1})
