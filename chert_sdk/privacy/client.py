"""
chert_sdk.privacy.client
========================

PrivacyManager: stealth accounts and private transfers.

Key generation, shared-secret derivation and memo sealing run locally (see
.crypto). Only two calls reach the node:

- sendPrivateTransaction          → submit a stealth transfer (returns tx_id)
- privacy_generateStealthAddress  → node-generated stealth address

Secret halves of key material never go over the wire: the submission carries
the sender's and the one-time keys' public halves only.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional

from pydantic import ValidationError

from .. import address as _address
from ..context import Context
from ..errors import PreconditionError, ResponseShapeError, expect_field
from ..rpc.http import RpcClient, call_for_field
from ..types.domain import PrivateTransactionRequest, StealthAccount, StealthKeys
from . import crypto

log = logging.getLogger(__name__)

SEND_PRIVATE_METHOD = "sendPrivateTransaction"
STEALTH_ADDRESS_METHOD = "privacy_generateStealthAddress"


class PrivacyManager:
    def __init__(self, rpc: RpcClient) -> None:
        self._rpc = rpc

    # ---- Local key material ---------------------------------------------------

    def generate_stealth_keys(self) -> StealthKeys:
        return crypto.generate_stealth_keys()

    def create_stealth_account(
        self,
        view_key: str,
        spend_public_key: str,
        keys: Optional[StealthKeys] = None,
    ) -> StealthAccount:
        """Stealth account for the given public view / spend keys."""
        return StealthAccount(
            address=_address.stealth_address(view_key, spend_public_key),
            view_key=view_key,
            spend_public_key=spend_public_key,
            keys=keys,
        )

    def derive_shared_secret(self, view_secret: str, recipient_view_public: str) -> str:
        return crypto.derive_shared_secret(view_secret, recipient_view_public)

    def encrypt_memo(self, memo: str, shared_secret: str) -> str:
        return crypto.encrypt_memo(memo, shared_secret)

    def decrypt_memo(self, encrypted_memo: str, shared_secret: str) -> str:
        return crypto.decrypt_memo(encrypted_memo, shared_secret)

    # ---- Node APIs ------------------------------------------------------------

    def send_private_transaction(
        self,
        request: PrivateTransactionRequest,
        recipient_view_key: str,
        recipient_spend_key: str,
        *,
        ctx: Optional[Context] = None,
    ) -> str:
        """
        Submit a stealth transfer and return the node's `tx_id`.

        A memo is sealed with the secret shared between the sender's view key
        and `recipient_view_key`; the recipient recovers it from the sender's
        public view key. Raises PreconditionError when a memo is given but
        the sender keys lack the view secret.
        """
        one_time = crypto.generate_stealth_keys()
        payload: Dict[str, Any] = {
            "sender_keys": request.sender_keys.public_only().to_wire(),
            "ephemeral_keys": one_time.public_only().to_wire(),
            "recipient_view_key": recipient_view_key,
            "recipient_spend_key": recipient_spend_key,
            "recipient_address": _address.stealth_address(recipient_view_key, recipient_spend_key),
            "amount": request.amount,
            "fee": request.fee,
            "privacy_level": request.privacy_level.value,
            "nonce": request.nonce,
        }
        if request.memo:
            view_secret = request.sender_keys.view_keypair.secret
            if not view_secret:
                raise PreconditionError("sender view secret key is required to encrypt a memo")
            shared = crypto.derive_shared_secret(view_secret, recipient_view_key)
            payload["encrypted_memo"] = crypto.encrypt_memo(request.memo, shared)

        tx_id = call_for_field(
            self._rpc, SEND_PRIVATE_METHOD, [payload], key="tx_id", what="private transaction", ctx=ctx
        )
        log.info("submitted private transfer tx_id=%s", tx_id)
        return tx_id

    def generate_stealth_address(
        self, include_secrets: bool = False, *, ctx: Optional[Context] = None
    ) -> StealthAccount:
        """
        Ask the node for a fresh stealth address. `address` is required; view
        and spend keys are returned when the node includes them.
        """
        result = self._rpc.call(
            STEALTH_ADDRESS_METHOD, [{"include_secrets": bool(include_secrets)}], ctx=ctx
        )
        addr = expect_field(result, "address", what="stealth address", method=STEALTH_ADDRESS_METHOD)
        assert isinstance(result, Mapping)

        keys: Optional[StealthKeys] = None
        raw_keys = result.get("keys")
        if raw_keys is not None:
            try:
                keys = StealthKeys.model_validate(raw_keys)
            except ValidationError as e:
                raise ResponseShapeError(
                    "invalid stealth address response",
                    method=STEALTH_ADDRESS_METHOD,
                    field="keys",
                    payload=result,
                ) from e

        view_key = result.get("view_key")
        spend_public_key = result.get("spend_public_key")
        if keys is not None:
            view_key = view_key or keys.view_keypair.public
            spend_public_key = spend_public_key or keys.spend_keypair.public
        return StealthAccount(
            address=addr,
            view_key=view_key if isinstance(view_key, str) else None,
            spend_public_key=spend_public_key if isinstance(spend_public_key, str) else None,
            keys=keys,
        )


__all__ = ["PrivacyManager", "SEND_PRIVATE_METHOD", "STEALTH_ADDRESS_METHOD"]
