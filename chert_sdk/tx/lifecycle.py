"""
chert_sdk.tx.lifecycle
======================

`TransferLifecycle` walks a single transfer through its states:

    built -> signed -> submitted -> pending -> confirmed | failed | rejected | timed_out

Each step is only legal from the state before it; calling a step out of
order raises PreconditionError. The object records the artifacts produced
along the way (unsigned body, signature, hash, last snapshot).

    flow = TransferLifecycle(rpc, account, TransactionRequest(to=..., amount="1", fee="0.1"))
    flow.sign()
    tx_hash = flow.submit()
    tx = flow.wait(timeout_s=30)
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Optional

from ..context import Context
from ..errors import ConfirmationTimeoutError, PreconditionError, TxError
from ..types.core import Account, Transaction, TransactionRequest, TransactionStatus
from ..wallet.signer import Signer, signer_for_account
from .build import SignedTransfer, UnsignedTransfer, build_transfer
from .send import DEFAULT_POLL_INTERVAL_S, _RpcClient, await_confirmation, sign_transfer, submit_transfer

log = logging.getLogger(__name__)


class TxPhase(str, Enum):
    BUILT = "built"
    SIGNED = "signed"
    SUBMITTED = "submitted"
    PENDING = "pending"
    CONFIRMED = "confirmed"
    FAILED = "failed"
    REJECTED = "rejected"
    TIMED_OUT = "timed_out"

    @property
    def is_final(self) -> bool:
        return self in (TxPhase.CONFIRMED, TxPhase.FAILED, TxPhase.REJECTED, TxPhase.TIMED_OUT)


_STATUS_PHASE = {
    TransactionStatus.PENDING: TxPhase.PENDING,
    TransactionStatus.CONFIRMED: TxPhase.CONFIRMED,
    TransactionStatus.FAILED: TxPhase.FAILED,
    TransactionStatus.REJECTED: TxPhase.REJECTED,
}


class TransferLifecycle:
    """State machine for one transfer. Not shared across threads."""

    def __init__(
        self,
        rpc: _RpcClient,
        account: Account,
        request: TransactionRequest,
        *,
        signer: Optional[Signer] = None,
    ) -> None:
        self._rpc = rpc
        self._account = account
        self._signer = signer
        self.unsigned: UnsignedTransfer = build_transfer(account.address, request)
        self.signed: Optional[SignedTransfer] = None
        self.tx_hash: Optional[str] = None
        self.transaction: Optional[Transaction] = None
        self.phase = TxPhase.BUILT

    def _require(self, *phases: TxPhase) -> None:
        if self.phase not in phases:
            allowed = ", ".join(p.value for p in phases)
            raise PreconditionError(f"cannot proceed from phase {self.phase.value!r} (expected {allowed})")

    def _advance(self, phase: TxPhase) -> None:
        log.debug("transfer %s: %s -> %s", self.tx_hash or "-", self.phase.value, phase.value)
        self.phase = phase

    def sign(self) -> SignedTransfer:
        self._require(TxPhase.BUILT)
        signer = self._signer if self._signer is not None else signer_for_account(self._account)
        self.signed = sign_transfer(self.unsigned, signer)
        self._advance(TxPhase.SIGNED)
        return self.signed

    def submit(self, *, ctx: Optional[Context] = None) -> str:
        self._require(TxPhase.SIGNED)
        assert self.signed is not None
        self.tx_hash = submit_transfer(self._rpc, self.signed, ctx=ctx)
        self._advance(TxPhase.SUBMITTED)
        return self.tx_hash

    def _observe(self, status: TransactionStatus) -> None:
        phase = _STATUS_PHASE[status]
        if phase is not self.phase:
            self._advance(phase)

    def wait(
        self,
        *,
        timeout_s: Optional[float] = None,
        poll_interval_s: float = DEFAULT_POLL_INTERVAL_S,
        ctx: Optional[Context] = None,
    ) -> Transaction:
        """
        Await a terminal status. On TxError / ConfirmationTimeoutError the
        phase is updated before the error propagates.
        """
        self._require(TxPhase.SUBMITTED, TxPhase.PENDING)
        assert self.tx_hash is not None
        try:
            tx = await_confirmation(
                self._rpc,
                self.tx_hash,
                timeout_s=timeout_s,
                poll_interval_s=poll_interval_s,
                ctx=ctx,
                on_status=self._observe,
            )
        except TxError as e:
            self.transaction = e.transaction
            raise
        except ConfirmationTimeoutError:
            self._advance(TxPhase.TIMED_OUT)
            raise
        self.transaction = tx
        return tx

    def run(
        self,
        *,
        timeout_s: Optional[float] = None,
        poll_interval_s: float = DEFAULT_POLL_INTERVAL_S,
        ctx: Optional[Context] = None,
    ) -> Transaction:
        """sign -> submit -> wait in one go."""
        self.sign()
        self.submit(ctx=ctx)
        return self.wait(timeout_s=timeout_s, poll_interval_s=poll_interval_s, ctx=ctx)


__all__ = ["TxPhase", "TransferLifecycle"]
