import pytest

from chert_sdk.errors import ResponseShapeError, RpcError
from chert_sdk.governance import GovernanceManager
from chert_sdk.types import ProposalStatus, VoteOption

TALLY = {"yes": "10", "no": "2", "abstain": "1", "no_with_veto": "0"}
PROPOSAL = {
    "id": "p-1",
    "title": "Raise block size",
    "description": "...",
    "proposer": "chert_" + "a" * 40,
    "status": "voting",
    "voting_start_time": "2024-03-01T00:00:00Z",
    "voting_end_time": "2024-03-08T00:00:00Z",
    "tally": TALLY,
}


def test_get_proposals_limit_param(fake_rpc) -> None:
    fake_rpc.on("governance_getProposals", {"proposals": [PROPOSAL]})
    gov = GovernanceManager(fake_rpc)

    (p,) = gov.get_proposals()
    assert p.tally.yes == "10"
    gov.get_proposals(limit=5)

    assert fake_rpc.calls == [
        ("governance_getProposals", [{}]),
        ("governance_getProposals", [{"limit": 5}]),
    ]


def test_reads(fake_rpc) -> None:
    fake_rpc.on("governance_getProposal", PROPOSAL)
    fake_rpc.on("governance_getProposalVotes", TALLY)
    fake_rpc.on("governance_getVoterVotes", {"p-1": "yes", "p-2": "no_with_veto"})
    fake_rpc.on("governance_getProposalStatus", {"status": "passed"})
    fake_rpc.on("governance_getVotingPower", {"voting_power": "1234"})
    fake_rpc.on("governance_getStats", {"total_proposals": 7, "active": 1})
    gov = GovernanceManager(fake_rpc)

    assert gov.get_proposal("p-1").title == "Raise block size"
    assert gov.get_proposal_votes("p-1").no == "2"
    assert gov.get_voter_votes("chert_a") == {"p-1": VoteOption.YES, "p-2": VoteOption.NO_WITH_VETO}
    assert gov.get_proposal_status("p-1") is ProposalStatus.PASSED
    assert gov.get_voting_power("chert_a") == "1234"
    assert gov.get_governance_stats()["total_proposals"] == 7
    assert fake_rpc.calls[-1] == ("governance_getStats", None)


def test_unknown_status_is_shape_error(fake_rpc) -> None:
    fake_rpc.on("governance_getProposalStatus", {"status": "limbo"})
    with pytest.raises(ResponseShapeError):
        GovernanceManager(fake_rpc).get_proposal_status("p-1")


def test_create_proposal_returns_id(fake_rpc) -> None:
    fake_rpc.on("governance_createProposal", {"proposal_id": "p-9"}, {"tx_hash": "0x1"})
    gov = GovernanceManager(fake_rpc)
    assert gov.create_proposal("t", "d", "chert_a", "1") == "p-9"
    assert fake_rpc.calls[-1][1] == [{"title": "t", "description": "d", "proposer": "chert_a", "fee": "1"}]
    with pytest.raises(ResponseShapeError) as ei:
        gov.create_proposal("t", "d", "chert_a", "1")
    assert ei.value.message == "invalid proposal creation response"


def test_vote_normalizes_option(fake_rpc) -> None:
    fake_rpc.on("governance_vote", {"tx_hash": "0xv"})
    gov = GovernanceManager(fake_rpc)
    assert gov.vote("p-1", "chert_a", "abstain", "0.1") == "0xv"
    assert gov.vote("p-1", "chert_a", VoteOption.NO, "0.1") == "0xv"
    assert [c[1][0]["option"] for c in fake_rpc.calls] == ["abstain", "no"]
    with pytest.raises(ValueError):
        gov.vote("p-1", "chert_a", "maybe", "0.1")


def test_execute_and_cancel(fake_rpc) -> None:
    fake_rpc.on("governance_executeProposal", {"tx_hash": "0xe"})
    fake_rpc.on("governance_cancelProposal", RpcError(code=-32000, message="only proposer may cancel"))
    gov = GovernanceManager(fake_rpc)
    assert gov.execute_proposal("p-1", "chert_a", "1") == "0xe"
    with pytest.raises(RpcError) as ei:
        gov.cancel_proposal("p-1", "chert_b", "1")
    assert ei.value.message == "only proposer may cancel"
