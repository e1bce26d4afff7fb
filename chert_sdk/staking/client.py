"""
chert_sdk.staking.client
========================

Thin, typed wrapper around the node's staking RPC surface:

- getValidators              -> list of validators
- getValidator               -> one validator by address
- staking_delegate           -> delegate tokens       (returns tx_hash)
- staking_undelegate         -> remove delegation     (returns tx_hash)
- getDelegations             -> delegations of an account
- getStakingRewards          -> reward summary of an account
- staking_claimRewards       -> claim rewards         (returns tx_hash)
- staking_registerValidator  -> register a validator  (returns tx_hash)
- staking_updateCommission   -> change commission     (returns tx_hash)

The node is the source of truth for balances, limits and eligibility; this
client performs no local validation.
"""

from __future__ import annotations

from typing import List, Optional

from ..context import Context
from ..rpc.http import RpcClient, call_for_field
from ..types.core import WireModel
from ..types.domain import Delegation, StakingRewards, Validator


class _ValidatorList(WireModel):
    validators: List[Validator]


class _DelegationList(WireModel):
    delegations: List[Delegation]


class StakingManager:
    """Staking and delegation operations over a shared RpcClient."""

    def __init__(self, rpc: RpcClient) -> None:
        self._rpc = rpc

    # ---- Read APIs ------------------------------------------------------------

    def get_validators(self, *, ctx: Optional[Context] = None) -> List[Validator]:
        res = self._rpc.call("getValidators", None, result_type=_ValidatorList, ctx=ctx)
        return list(res.validators)

    def get_validator(self, address: str, *, ctx: Optional[Context] = None) -> Validator:
        return self._rpc.call("getValidator", [address], result_type=Validator, ctx=ctx)

    def get_delegations(self, delegator_address: str, *, ctx: Optional[Context] = None) -> List[Delegation]:
        res = self._rpc.call("getDelegations", [delegator_address], result_type=_DelegationList, ctx=ctx)
        return list(res.delegations)

    def get_staking_rewards(self, delegator_address: str, *, ctx: Optional[Context] = None) -> StakingRewards:
        return self._rpc.call("getStakingRewards", [delegator_address], result_type=StakingRewards, ctx=ctx)

    # ---- Write APIs (return tx hashes) ---------------------------------------

    def delegate(
        self,
        delegator_address: str,
        validator_address: str,
        amount: str,
        fee: str,
        *,
        ctx: Optional[Context] = None,
    ) -> str:
        params = {
            "delegator": delegator_address,
            "validator": validator_address,
            "amount": amount,
            "fee": fee,
        }
        return call_for_field(self._rpc, "staking_delegate", [params], key="tx_hash", what="delegation", ctx=ctx)

    def undelegate(
        self,
        delegator_address: str,
        validator_address: str,
        amount: str,
        fee: str,
        *,
        ctx: Optional[Context] = None,
    ) -> str:
        params = {
            "delegator": delegator_address,
            "validator": validator_address,
            "amount": amount,
            "fee": fee,
        }
        return call_for_field(self._rpc, "staking_undelegate", [params], key="tx_hash", what="undelegation", ctx=ctx)

    def claim_rewards(
        self,
        delegator_address: str,
        validator_address: str,
        fee: str,
        *,
        ctx: Optional[Context] = None,
    ) -> str:
        params = {
            "delegator": delegator_address,
            "validator": validator_address,
            "fee": fee,
        }
        return call_for_field(self._rpc, "staking_claimRewards", [params], key="tx_hash", what="claim rewards", ctx=ctx)

    def register_validator(
        self,
        validator: Validator,
        owner_address: str,
        fee: str,
        *,
        ctx: Optional[Context] = None,
    ) -> str:
        params = {
            "validator": validator.to_wire(),
            "owner_address": owner_address,
            "fee": fee,
        }
        return call_for_field(
            self._rpc, "staking_registerValidator", [params], key="tx_hash", what="validator registration", ctx=ctx
        )

    def update_commission(
        self,
        validator_address: str,
        owner_address: str,
        new_rate: int,
        fee: str,
        *,
        ctx: Optional[Context] = None,
    ) -> str:
        """`new_rate` is in the node's integer commission units (e.g. basis points)."""
        if new_rate < 0:
            raise ValueError("new_rate must be non-negative")
        params = {
            "validator_address": validator_address,
            "owner_address": owner_address,
            "new_rate": int(new_rate),
            "fee": fee,
        }
        return call_for_field(
            self._rpc, "staking_updateCommission", [params], key="tx_hash", what="commission update", ctx=ctx
        )


__all__ = ["StakingManager"]
