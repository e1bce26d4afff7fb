"""
Domain wire types for staking, governance and privacy (stealth) operations.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import Field

from .core import WireModel

# -----------------------------------------------------------------------------
# Staking
# -----------------------------------------------------------------------------


class ValidatorStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    JAILED = "jailed"


class Validator(WireModel):
    address: str
    name: str
    voting_power: str
    commission: str
    status: str
    total_delegated: str
    delegator_count: int
    public_key: Optional[str] = None
    stake_amount: Optional[int] = None
    commission_rate: Optional[int] = None
    is_active: Optional[bool] = None
    reputation_score: Optional[float] = None
    last_activity: Optional[datetime] = None


class DelegationRequest(WireModel):
    validator_address: str
    amount: str
    fee: str


class Delegation(WireModel):
    validator_address: str
    amount: str
    rewards: str
    timestamp: datetime


class StakingRewards(WireModel):
    total: str
    available: str
    pending: str
    last_claim: Optional[datetime] = None


# -----------------------------------------------------------------------------
# Governance
# -----------------------------------------------------------------------------


class ProposalStatus(str, Enum):
    VOTING = "voting"
    PASSED = "passed"
    REJECTED = "rejected"
    EXECUTED = "executed"
    FAILED = "failed"


class VoteOption(str, Enum):
    YES = "yes"
    NO = "no"
    ABSTAIN = "abstain"
    NO_WITH_VETO = "no_with_veto"


class VoteTally(WireModel):
    yes: str
    no: str
    abstain: str
    no_with_veto: str


class Proposal(WireModel):
    id: str
    title: str
    description: str
    proposer: str
    status: str
    voting_start_time: datetime
    voting_end_time: datetime
    tally: VoteTally


class VoteRequest(WireModel):
    proposal_id: str
    option: VoteOption
    fee: str


# -----------------------------------------------------------------------------
# Privacy
# -----------------------------------------------------------------------------


class PrivacyLevel(str, Enum):
    STEALTH = "stealth"
    ENCRYPTED = "encrypted"


class KeyPair(WireModel):
    """Hex-encoded keypair. `secret` is absent for public-only views."""

    public: str
    secret: Optional[str] = Field(default=None, repr=False)

    def public_only(self) -> "KeyPair":
        return KeyPair(public=self.public)


class StealthKeys(WireModel):
    view_keypair: KeyPair
    spend_keypair: KeyPair

    def public_only(self) -> "StealthKeys":
        return StealthKeys(
            view_keypair=self.view_keypair.public_only(),
            spend_keypair=self.spend_keypair.public_only(),
        )


class StealthAccount(WireModel):
    address: str
    view_key: Optional[str] = None
    spend_public_key: Optional[str] = None
    keys: Optional[StealthKeys] = None


class PrivateTransactionRequest(WireModel):
    sender_keys: StealthKeys
    recipient_view_key: str
    amount: str
    fee: str
    memo: Optional[str] = None
    privacy_level: PrivacyLevel = PrivacyLevel.STEALTH
    nonce: int = Field(default=0, ge=0)


class PrivateTransaction(WireModel):
    tx_id: str
    amount: str
    memo: Optional[str] = None
    sender: Optional[str] = None
    timestamp: datetime
    fee: str


__all__ = [
    "ValidatorStatus",
    "Validator",
    "DelegationRequest",
    "Delegation",
    "StakingRewards",
    "ProposalStatus",
    "VoteOption",
    "VoteTally",
    "Proposal",
    "VoteRequest",
    "PrivacyLevel",
    "KeyPair",
    "StealthKeys",
    "StealthAccount",
    "PrivateTransactionRequest",
    "PrivateTransaction",
]
