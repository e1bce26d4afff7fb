import pytest

from chert_sdk.address import from_public_key
from chert_sdk.errors import PreconditionError, ResponseShapeError
from chert_sdk.tx.encode import SIGN_DOMAIN, canonical_json
from chert_sdk.tx.lifecycle import TransferLifecycle, TxPhase
from chert_sdk.types import Account, TransactionRequest, TransactionStatus
from chert_sdk.wallet.signer import Ed25519Signer, verify_signature


def _account() -> Account:
    s = Ed25519Signer.from_private_key(bytes(range(32)))
    return Account(
        address=from_public_key(s.public_key),
        public_key=s.public_key_hex,
        private_key=s.private_key_hex(),
    )


def test_transfer_sign_submit_confirm(fake_rpc, tx_json) -> None:
    acct = _account()
    addr_b = "chert_" + "b" * 40
    fake_rpc.on("sendTransaction", {"hash": "0xabc"})
    fake_rpc.on(
        "getTransaction",
        tx_json("0xabc", "pending", sender=acct.address, to=addr_b),
        tx_json("0xabc", "confirmed", sender=acct.address, to=addr_b, block_height=12),
    )

    flow = TransferLifecycle(fake_rpc, acct, TransactionRequest(to=addr_b, amount="1.5", fee="0.01"))
    assert flow.phase is TxPhase.BUILT

    signed = flow.sign()
    assert flow.phase is TxPhase.SIGNED
    assert verify_signature(acct.public_key, signed.unsigned.sign_bytes(), signed.signature)

    assert flow.submit() == "0xabc"
    assert flow.phase is TxPhase.SUBMITTED

    (method, params), = fake_rpc.calls
    assert method == "sendTransaction"
    payload = params[0]
    assert payload["sender"] == acct.address
    assert payload["recipient"] == addr_b
    assert payload["amount"] == "1.5"
    assert payload["fee"] == "0.01"
    assert payload["nonce"] == 0
    assert payload["public_key"] == acct.public_key
    assert len(bytes.fromhex(payload["signature"])) == 64
    assert "memo" not in payload

    tx = flow.wait(timeout_s=2.0, poll_interval_s=0.01)
    assert tx.status is TransactionStatus.CONFIRMED
    assert tx.block_height == 12
    assert flow.phase is TxPhase.CONFIRMED
    assert flow.transaction == tx


def test_sign_bytes_are_domain_tagged_sorted_json() -> None:
    acct = _account()
    flow = TransferLifecycle(object(), acct, TransactionRequest(to="chert_" + "c" * 40, amount="2", fee="1", memo="hi", nonce=3))
    raw = flow.unsigned.sign_bytes()
    assert raw.startswith(SIGN_DOMAIN)
    assert raw[len(SIGN_DOMAIN):] == canonical_json(flow.unsigned.body())
    assert b'"memo":"hi"' in raw and b'"nonce":3' in raw


def test_missing_hash_is_invalid_transaction_response(fake_rpc) -> None:
    fake_rpc.on("sendTransaction", {"status": "ok"})
    flow = TransferLifecycle(fake_rpc, _account(), TransactionRequest(to="chert_" + "b" * 40, amount="1", fee="0"))
    flow.sign()
    with pytest.raises(ResponseShapeError) as ei:
        flow.submit()
    assert ei.value.message == "invalid transaction response"
    assert flow.phase is TxPhase.SIGNED


def test_watch_only_account_cannot_sign(fake_rpc) -> None:
    acct = _account()
    watch = Account(address=acct.address, public_key=acct.public_key)
    flow = TransferLifecycle(fake_rpc, watch, TransactionRequest(to="chert_" + "b" * 40, amount="1", fee="0"))
    with pytest.raises(PreconditionError):
        flow.sign()
    assert fake_rpc.calls == []


def test_explicit_signer_overrides_watch_only(fake_rpc) -> None:
    s = Ed25519Signer.generate()
    watch = Account(address=from_public_key(s.public_key), public_key=s.public_key_hex)
    fake_rpc.on("sendTransaction", {"hash": "0xdef"})
    flow = TransferLifecycle(fake_rpc, watch, TransactionRequest(to="chert_" + "b" * 40, amount="1", fee="0"), signer=s)
    flow.sign()
    assert flow.submit() == "0xdef"


def test_steps_out_of_order_are_rejected(fake_rpc) -> None:
    flow = TransferLifecycle(fake_rpc, _account(), TransactionRequest(to="chert_" + "b" * 40, amount="1", fee="0"))
    with pytest.raises(PreconditionError):
        flow.submit()
    with pytest.raises(PreconditionError):
        flow.wait()
    flow.sign()
    with pytest.raises(PreconditionError):
        flow.sign()


def test_wait_records_timed_out_phase(fake_rpc) -> None:
    from chert_sdk.errors import ConfirmationTimeoutError, RpcError

    fake_rpc.on("sendTransaction", {"hash": "0xabc"})
    fake_rpc.on("getTransaction", RpcError(code=-32004, message="transaction not found"))
    flow = TransferLifecycle(fake_rpc, _account(), TransactionRequest(to="chert_" + "b" * 40, amount="1", fee="0"))
    flow.sign()
    flow.submit()
    with pytest.raises(ConfirmationTimeoutError):
        flow.wait(timeout_s=0.05, poll_interval_s=0.01)
    assert flow.phase is TxPhase.TIMED_OUT
    assert flow.phase.is_final


def test_wait_records_rejection(fake_rpc, tx_json) -> None:
    from chert_sdk.errors import TxError

    fake_rpc.on("sendTransaction", {"hash": "0xabc"})
    fake_rpc.on("getTransaction", tx_json("0xabc", "rejected"))
    flow = TransferLifecycle(fake_rpc, _account(), TransactionRequest(to="chert_" + "b" * 40, amount="1", fee="0"))
    with pytest.raises(TxError):
        flow.run(timeout_s=1.0, poll_interval_s=0.01)
    assert flow.phase is TxPhase.REJECTED
    assert flow.transaction is not None
