"""
chert_sdk.tx.build
==================

Builders for Chert transfers.

`build_transfer` turns a caller's `TransactionRequest` plus the sending
address into an immutable `UnsignedTransfer`; signing it (see tx.send) yields a
`SignedTransfer` whose `to_payload()` is exactly what `sendTransaction`
receives:

    {sender, recipient, amount, fee, nonce, signature, public_key, memo?}

Amounts and fees are decimal strings and are passed through untouched; the
node owns all business validation.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..types.core import TransactionRequest
from ..utils.bytes import to_hex
from .encode import build_sign_bytes


@dataclass(frozen=True)
class UnsignedTransfer:
    sender: str
    recipient: str
    amount: str
    fee: str
    nonce: int = 0
    memo: Optional[str] = None

    def body(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "sender": self.sender,
            "recipient": self.recipient,
            "amount": self.amount,
            "fee": self.fee,
            "nonce": int(self.nonce),
        }
        if self.memo:
            out["memo"] = self.memo
        return out

    def sign_bytes(self) -> bytes:
        return build_sign_bytes(self.body())


@dataclass(frozen=True)
class SignedTransfer:
    unsigned: UnsignedTransfer
    signature: bytes
    public_key: bytes

    def to_payload(self) -> Dict[str, Any]:
        payload = self.unsigned.body()
        payload["signature"] = to_hex(self.signature)
        payload["public_key"] = to_hex(self.public_key)
        return payload


def build_transfer(sender: str, request: TransactionRequest) -> UnsignedTransfer:
    """
    Assemble an unsigned transfer. An unset nonce is sent as 0 and left for
    the node to assign.
    """
    return UnsignedTransfer(
        sender=sender,
        recipient=request.to,
        amount=request.amount,
        fee=request.fee,
        nonce=request.nonce or 0,
        memo=request.memo or None,
    )


__all__ = ["UnsignedTransfer", "SignedTransfer", "build_transfer"]
