"""
chert_sdk.wallet.manager
========================

Account management and transfers.

Local (no RPC):
- create_account()                      fresh Ed25519 keypair
- import_account(private_key_hex)
- create_watch_only_account(public_key_hex)

Remote:
- getBalance        -> get_balance(address)
- sendTransaction   -> send_transaction(request, account)
- getTransaction    -> get_transaction(hash)
- estimateFee       -> estimate_fee(request)
- wait_for_transaction(hash, timeout_s)  (polls getTransaction)
"""

from __future__ import annotations

from typing import Optional

from ..address import from_public_key
from ..config import Network
from ..context import Context
from ..rpc.http import RpcClient
from ..tx.lifecycle import TransferLifecycle
from ..tx.send import DEFAULT_POLL_INTERVAL_S, await_confirmation, get_transaction
from ..types.core import Account, Balance, Fee, Transaction, TransactionRequest
from .signer import Ed25519Signer, Signer, derive_public_key


class WalletManager:
    """
    Wallet operations over a shared RpcClient.

    Addresses are derived for the configured network.
    """

    def __init__(self, rpc: RpcClient, *, network: Network = Network.MAINNET) -> None:
        self._rpc = rpc
        self._network = network

    # ---- Local account helpers ------------------------------------------------

    def create_account(self) -> Account:
        """Create an account with a randomly generated Ed25519 keypair."""
        signer = Ed25519Signer.generate()
        return Account(
            address=from_public_key(signer.public_key, self._network),
            public_key=signer.public_key_hex,
            private_key=signer.private_key_hex(),
        )

    def import_account(self, private_key: str) -> Account:
        """Import an account from a hex-encoded 32-byte private key."""
        public_key = derive_public_key(private_key)
        return Account(
            address=from_public_key(public_key, self._network),
            public_key=public_key,
            private_key=private_key.lower().removeprefix("0x"),
        )

    def create_watch_only_account(self, public_key: str) -> Account:
        """Watch-only account: can query but never sign."""
        return Account(address=from_public_key(public_key, self._network), public_key=public_key)

    # ---- Read APIs ------------------------------------------------------------

    def get_balance(self, address: str, *, ctx: Optional[Context] = None) -> Balance:
        return self._rpc.call("getBalance", [address], result_type=Balance, ctx=ctx)

    def get_transaction(self, tx_hash: str, *, ctx: Optional[Context] = None) -> Transaction:
        return get_transaction(self._rpc, tx_hash, ctx=ctx)

    def estimate_fee(self, request: TransactionRequest, *, ctx: Optional[Context] = None) -> Fee:
        return self._rpc.call("estimateFee", [request.to_wire()], result_type=Fee, ctx=ctx)

    # ---- Transfers ------------------------------------------------------------

    def send_transaction(
        self,
        request: TransactionRequest,
        account: Account,
        *,
        signer: Optional[Signer] = None,
        ctx: Optional[Context] = None,
    ) -> str:
        """
        Sign `request` with `account` (or an explicit `signer`) and submit it.

        Returns the transaction hash. Raises PreconditionError for watch-only
        accounts without an explicit signer.
        """
        flow = TransferLifecycle(self._rpc, account, request, signer=signer)
        flow.sign()
        return flow.submit(ctx=ctx)

    def wait_for_transaction(
        self,
        tx_hash: str,
        timeout_s: Optional[float] = None,
        *,
        poll_interval_s: float = DEFAULT_POLL_INTERVAL_S,
        ctx: Optional[Context] = None,
    ) -> Transaction:
        """
        Block until `tx_hash` is confirmed. See `tx.send.await_confirmation`;
        a ConfirmationTimeoutError leaves the final outcome unknown.
        """
        return await_confirmation(
            self._rpc,
            tx_hash,
            timeout_s=timeout_s,
            poll_interval_s=poll_interval_s,
            ctx=ctx,
        )


__all__ = ["WalletManager"]
