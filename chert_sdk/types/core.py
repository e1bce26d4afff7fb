"""
Core wire types: accounts, balances, transactions, fees, network status and
blocks.

These are typed *views* over the JSON shapes the node returns. Field names
match the wire (snake_case); the only alias is `Transaction.sender` <-> "from".
Models are frozen: the client never mutates server truth, it only observes
fresh snapshots.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class WireModel(BaseModel):
    """Base for all SDK models: immutable, unknown fields ignored."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    def to_wire(self) -> dict:
        """JSON-ready dict using wire field names, dropping unset optionals."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# -----------------------------------------------------------------------------
# Accounts
# -----------------------------------------------------------------------------


class Account(WireModel):
    """
    A key-based account. Presence of `private_key` distinguishes a
    spending-capable account from a watch-only one.
    """

    address: str
    public_key: str
    private_key: Optional[str] = Field(default=None, repr=False)

    @property
    def is_watch_only(self) -> bool:
        return not self.private_key


class Balance(WireModel):
    available: str
    pending: str
    total: str


# -----------------------------------------------------------------------------
# Transactions
# -----------------------------------------------------------------------------


class TransactionStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    FAILED = "failed"
    REJECTED = "rejected"

    @property
    def is_terminal(self) -> bool:
        return self is not TransactionStatus.PENDING


class TransactionRequest(WireModel):
    """Caller-supplied transfer intent."""

    to: str
    amount: str
    fee: str
    memo: Optional[str] = None
    nonce: Optional[int] = Field(default=None, ge=0)


class Transaction(WireModel):
    """Server-truth snapshot of a transaction, fetched by hash."""

    hash: str
    sender: str = Field(alias="from")
    to: str
    amount: str
    fee: str
    memo: Optional[str] = None
    block_height: Optional[int] = None
    status: TransactionStatus
    timestamp: datetime
    nonce: int


class Fee(WireModel):
    """Advisory fee estimate; not binding on the node."""

    amount: str
    gas_limit: Optional[int] = None
    gas_price: Optional[str] = None


# -----------------------------------------------------------------------------
# Network / blocks
# -----------------------------------------------------------------------------


class NetworkStatus(WireModel):
    block_height: int
    network_id: str
    consensus_version: str
    peer_count: int
    syncing: bool
    latest_block_time: datetime


class Block(WireModel):
    height: int
    hash: str
    previous_hash: str
    timestamp: datetime
    transaction_count: int
    proposer: str
    transactions: List[Transaction] = Field(default_factory=list)


__all__ = [
    "WireModel",
    "Account",
    "Balance",
    "TransactionStatus",
    "TransactionRequest",
    "Transaction",
    "Fee",
    "NetworkStatus",
    "Block",
]
