"""
chert_sdk.governance.client
===========================

Client for the governance RPC surface:

- governance_getProposals       → list proposals (optional limit)
- governance_getProposal        → one proposal by id
- governance_createProposal     → submit a proposal       (returns proposal_id)
- governance_vote               → cast a vote             (returns tx_hash)
- governance_getProposalVotes   → current tally
- governance_getVoterVotes      → {proposal_id: option} for a voter
- governance_executeProposal    → execute a passed proposal (returns tx_hash)
- governance_cancelProposal     → cancel (proposer only)  (returns tx_hash)
- governance_getProposalStatus  → status only
- governance_getVotingPower     → voting power of an address
- governance_getStats           → free-form statistics

Eligibility, quorum and voting windows are enforced by the node and surface
as RpcError.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from ..context import Context
from ..rpc.http import RpcClient, call_for_field
from ..types.core import WireModel
from ..types.domain import Proposal, ProposalStatus, VoteOption, VoteTally


class _ProposalList(WireModel):
    proposals: List[Proposal]


class _ProposalStatusView(WireModel):
    status: ProposalStatus


class _VotingPowerView(WireModel):
    voting_power: str


class GovernanceManager:
    """Governance operations over a shared RpcClient."""

    def __init__(self, rpc: RpcClient) -> None:
        self._rpc = rpc

    # ---- Read APIs ------------------------------------------------------------

    def get_proposals(self, limit: int = 0, *, ctx: Optional[Context] = None) -> List[Proposal]:
        """Proposals known to the node; `limit <= 0` leaves paging to the node."""
        params: Dict[str, Any] = {}
        if limit > 0:
            params["limit"] = int(limit)
        res = self._rpc.call("governance_getProposals", [params], result_type=_ProposalList, ctx=ctx)
        return list(res.proposals)

    def get_proposal(self, proposal_id: str, *, ctx: Optional[Context] = None) -> Proposal:
        return self._rpc.call("governance_getProposal", [proposal_id], result_type=Proposal, ctx=ctx)

    def get_proposal_votes(self, proposal_id: str, *, ctx: Optional[Context] = None) -> VoteTally:
        return self._rpc.call("governance_getProposalVotes", [proposal_id], result_type=VoteTally, ctx=ctx)

    def get_voter_votes(self, voter_address: str, *, ctx: Optional[Context] = None) -> Dict[str, VoteOption]:
        return self._rpc.call(
            "governance_getVoterVotes", [voter_address], result_type=Dict[str, VoteOption], ctx=ctx
        )

    def get_proposal_status(self, proposal_id: str, *, ctx: Optional[Context] = None) -> ProposalStatus:
        res = self._rpc.call(
            "governance_getProposalStatus", [proposal_id], result_type=_ProposalStatusView, ctx=ctx
        )
        return res.status

    def get_voting_power(self, address: str, *, ctx: Optional[Context] = None) -> str:
        res = self._rpc.call("governance_getVotingPower", [address], result_type=_VotingPowerView, ctx=ctx)
        return res.voting_power

    def get_governance_stats(self, *, ctx: Optional[Context] = None) -> Dict[str, Any]:
        return self._rpc.call("governance_getStats", None, result_type=Dict[str, Any], ctx=ctx)

    # ---- Write APIs -------------------------------------------------------------

    def create_proposal(
        self,
        title: str,
        description: str,
        proposer_address: str,
        fee: str,
        *,
        ctx: Optional[Context] = None,
    ) -> str:
        """Submit a proposal; returns its proposal id."""
        params = {
            "title": title,
            "description": description,
            "proposer": proposer_address,
            "fee": fee,
        }
        return call_for_field(
            self._rpc, "governance_createProposal", [params], key="proposal_id", what="proposal creation", ctx=ctx
        )

    def vote(
        self,
        proposal_id: str,
        voter_address: str,
        option: Union[VoteOption, str],
        fee: str,
        *,
        ctx: Optional[Context] = None,
    ) -> str:
        params = {
            "proposal_id": proposal_id,
            "voter": voter_address,
            "option": VoteOption(option).value,
            "fee": fee,
        }
        return call_for_field(self._rpc, "governance_vote", [params], key="tx_hash", what="vote", ctx=ctx)

    def execute_proposal(
        self,
        proposal_id: str,
        executor_address: str,
        fee: str,
        *,
        ctx: Optional[Context] = None,
    ) -> str:
        params = {
            "proposal_id": proposal_id,
            "executor": executor_address,
            "fee": fee,
        }
        return call_for_field(
            self._rpc, "governance_executeProposal", [params], key="tx_hash", what="proposal execution", ctx=ctx
        )

    def cancel_proposal(
        self,
        proposal_id: str,
        proposer_address: str,
        fee: str,
        *,
        ctx: Optional[Context] = None,
    ) -> str:
        params = {
            "proposal_id": proposal_id,
            "proposer": proposer_address,
            "fee": fee,
        }
        return call_for_field(
            self._rpc, "governance_cancelProposal", [params], key="tx_hash", what="proposal cancellation", ctx=ctx
        )


__all__ = ["GovernanceManager"]
