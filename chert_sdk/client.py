"""
chert_sdk.client
================

`ChertClient` is the entry point most applications need: one shared HTTP
pool, one JSON-RPC client, and the domain managers wired onto it.

    from chert_sdk import ChertClient, ClientConfig

    with ChertClient(ClientConfig(endpoint="https://testnet.chert.com", network="testnet")) as c:
        if c.is_connected():
            print(c.get_network_status().block_height)
            acct = c.wallet.create_account()
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from .config import ClientConfig, default_config
from .context import Context
from .errors import ChertSdkError
from .governance.client import GovernanceManager
from .privacy.client import PrivacyManager
from .rpc.http import RpcClient
from .rpc.rest import RestClient
from .staking.client import StakingManager
from .tx.send import get_transaction as _get_transaction
from .types.core import Block, NetworkStatus, Transaction
from .wallet.manager import WalletManager

log = logging.getLogger(__name__)


class ChertClient:
    """Facade over the JSON-RPC transport and the domain managers."""

    def __init__(self, config: Optional[ClientConfig] = None, *, http_client: Optional[httpx.Client] = None) -> None:
        self._config = config if config is not None else default_config()
        self._owns_http = http_client is None
        self._http = http_client if http_client is not None else httpx.Client(timeout=self._config.timeout)

        self.rpc = RpcClient.from_config(self._config, client=self._http)
        self.rest = RestClient(self._config, client=self._http)

        self.wallet = WalletManager(self.rpc, network=self._config.network)
        self.staking = StakingManager(self.rpc)
        self.governance = GovernanceManager(self.rpc)
        self.privacy = PrivacyManager(self.rpc)
        log.debug("chert client ready endpoint=%s network=%s", self._config.endpoint, self._config.network.value)

    @property
    def config(self) -> ClientConfig:
        return self._config

    # ---- Chain reads ----------------------------------------------------------

    def get_network_status(self, *, ctx: Optional[Context] = None) -> NetworkStatus:
        return self.rpc.call("getNetworkStatus", result_type=NetworkStatus, ctx=ctx)

    def get_latest_block(self, *, ctx: Optional[Context] = None) -> Block:
        return self.rpc.call("getLatestBlock", result_type=Block, ctx=ctx)

    def get_block(self, height: int, *, ctx: Optional[Context] = None) -> Block:
        return self.rpc.call("getBlock", [int(height)], result_type=Block, ctx=ctx)

    def get_transaction(self, tx_hash: str, *, ctx: Optional[Context] = None) -> Transaction:
        return _get_transaction(self.rpc, tx_hash, ctx=ctx)

    def is_connected(self, *, ctx: Optional[Context] = None) -> bool:
        """True if the node answers getNetworkStatus. Never raises SDK errors."""
        try:
            self.get_network_status(ctx=ctx)
        except ChertSdkError as e:
            log.debug("connectivity check failed: %s", e)
            return False
        return True

    def request(
        self,
        method: str,
        path: str,
        body: Any = None,
        *,
        result_type: Any = None,
        ctx: Optional[Context] = None,
    ) -> Any:
        """Raw REST request against the configured endpoint (see RestClient)."""
        return self.rest.request(method, path, body, result_type=result_type, ctx=ctx)

    # ---- Lifecycle ------------------------------------------------------------

    def close(self) -> None:
        if self._owns_http:
            self._http.close()

    def __enter__(self) -> "ChertClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:  # noqa: ANN001
        self.close()


__all__ = ["ChertClient"]
