"""
chert_sdk.tx.send
=================

Sign, submit and track transfers over JSON-RPC.

Primary entry points
--------------------
- sign_transfer(unsigned, signer) -> SignedTransfer
    Signs the canonical sign-bytes with any object satisfying `Signer`.

- submit_transfer(rpc, signed, *, ctx=None) -> str
    Sends the payload via `sendTransaction` and returns the `hash` field.

- get_transaction(rpc, tx_hash, *, ctx=None) -> Transaction
    Fetches the node's current snapshot via `getTransaction`.

- await_confirmation(rpc, tx_hash, *, timeout_s=60, poll_interval_s=2, ctx=None) -> Transaction
    Polls `getTransaction` until a terminal status or the budget runs out.

Polling semantics
-----------------
A fetch that errors (hash not indexed yet, node hiccup, unexpected shape) is
treated as "not yet available" and polling continues; there is no backoff.
Each fetch is bounded by the remaining budget, so a hung node cannot hold the
loop past the deadline.
`confirmed` returns the Transaction; `failed` / `rejected` raise TxError.
If the budget is exhausted first, ConfirmationTimeoutError is raised and the
transaction's final fate is unknown to the caller: it may still confirm.
A cancelled context aborts the wait immediately with CancelledError.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Optional, Protocol

from ..context import Context, ensure_context
from ..errors import (
    CancelledError,
    ChertSdkError,
    ConfirmationTimeoutError,
    PreconditionError,
    TxError,
    expect_field,
)
from ..types.core import Transaction, TransactionStatus
from ..wallet.signer import Signer
from .build import SignedTransfer, UnsignedTransfer

log = logging.getLogger(__name__)

SEND_METHOD = "sendTransaction"
GET_METHOD = "getTransaction"

DEFAULT_CONFIRM_TIMEOUT_S = 60.0
DEFAULT_POLL_INTERVAL_S = 2.0


class _RpcClient(Protocol):
    """
    Minimal interface expected from chert_sdk.rpc.http.RpcClient.
    """

    def call(
        self,
        method: str,
        params: Any = None,
        *,
        result_type: Any = None,
        ctx: Optional[Context] = None,
    ) -> Any: ...


# -----------------------------------------------------------------------------
# Sign / submit / fetch
# -----------------------------------------------------------------------------


def sign_transfer(unsigned: UnsignedTransfer, signer: Optional[Signer]) -> SignedTransfer:
    """
    Sign `unsigned` with `signer`. A missing signer (watch-only account) is a
    precondition failure, not an RPC error.
    """
    if signer is None:
        raise PreconditionError("no signer available for transaction")
    signature = signer.sign(unsigned.sign_bytes())
    if not signature:
        raise PreconditionError("signer returned an empty signature")
    return SignedTransfer(unsigned=unsigned, signature=bytes(signature), public_key=bytes(signer.public_key))


def submit_transfer(rpc: _RpcClient, signed: SignedTransfer, *, ctx: Optional[Context] = None) -> str:
    """
    Submit a signed transfer. Returns the node-assigned transaction hash.

    Raises ResponseShapeError("invalid transaction response") if the result
    carries no string `hash`.
    """
    result = rpc.call(SEND_METHOD, [signed.to_payload()], ctx=ctx)
    tx_hash = expect_field(result, "hash", what="transaction", method=SEND_METHOD)
    log.info("submitted transfer %s -> %s tx=%s", signed.unsigned.sender, signed.unsigned.recipient, tx_hash)
    return tx_hash


def get_transaction(rpc: _RpcClient, tx_hash: str, *, ctx: Optional[Context] = None) -> Transaction:
    """Fetch the node's current view of `tx_hash`."""
    return rpc.call(GET_METHOD, [tx_hash], result_type=Transaction, ctx=ctx)


# -----------------------------------------------------------------------------
# Polling waiter
# -----------------------------------------------------------------------------


def await_confirmation(
    rpc: _RpcClient,
    tx_hash: str,
    *,
    timeout_s: Optional[float] = None,
    poll_interval_s: float = DEFAULT_POLL_INTERVAL_S,
    ctx: Optional[Context] = None,
    clock: Callable[[], float] = time.monotonic,
    on_status: Optional[Callable[[TransactionStatus], None]] = None,
) -> Transaction:
    """
    Poll until `tx_hash` reaches a terminal status or `timeout_s` elapses.

    `timeout_s` of None or 0 means the default of 60 seconds. Fetches are
    sequential; the loop never sleeps past the remaining budget, so it returns
    within one poll interval of the deadline.

    Raises:
        TxError                   status failed / rejected
        ConfirmationTimeoutError  no terminal status within the budget
        CancelledError            context cancelled or past its deadline
    """
    ctx = ensure_context(ctx)
    budget = float(timeout_s) if timeout_s else DEFAULT_CONFIRM_TIMEOUT_S
    interval = float(poll_interval_s)
    if interval <= 0:
        raise ValueError("poll_interval_s must be positive")

    deadline = clock() + budget
    last_status: Optional[TransactionStatus] = None

    while True:
        ctx.check()
        fetch_ctx = ctx.with_timeout(max(deadline - clock(), 0.001))
        try:
            tx: Optional[Transaction] = get_transaction(rpc, tx_hash, ctx=fetch_ctx)
        except CancelledError as e:
            if ctx.cancelled:
                raise
            # the fetch outran the remaining budget
            log.debug("poll %s: fetch cut short (%s)", tx_hash, e)
            tx = None
        except ChertSdkError as e:
            log.debug("poll %s: not yet available (%s)", tx_hash, e)
            tx = None
        finally:
            fetch_ctx.cancel("fetch finished")

        if tx is not None:
            last_status = tx.status
            if on_status is not None:
                on_status(tx.status)
            if tx.status is TransactionStatus.CONFIRMED:
                log.info("tx %s confirmed at height %s", tx_hash, tx.block_height)
                return tx
            if tx.status in (TransactionStatus.FAILED, TransactionStatus.REJECTED):
                raise TxError(
                    f"transaction {tx.status.value}",
                    tx_hash=tx_hash,
                    status=tx.status.value,
                    transaction=tx,
                )
            log.debug("poll %s: status %s", tx_hash, tx.status.value)

        remaining = deadline - clock()
        if remaining <= 0:
            raise ConfirmationTimeoutError(
                tx_hash=tx_hash,
                timeout_s=budget,
                last_status=last_status.value if last_status is not None else None,
            )
        ctx.sleep(min(interval, remaining))


__all__ = [
    "SEND_METHOD",
    "GET_METHOD",
    "DEFAULT_CONFIRM_TIMEOUT_S",
    "DEFAULT_POLL_INTERVAL_S",
    "sign_transfer",
    "submit_transfer",
    "get_transaction",
    "await_confirmation",
]
