"""
Chert SDK for Python
Convenience exports for the most common client APIs.
"""

from .version import __version__  # noqa: F401

# Core config, context & errors
from .config import ClientConfig, Network  # noqa: F401
from .context import Context  # noqa: F401
from .errors import (  # noqa: F401
    APIError,
    CancelledError,
    ChertSdkError,
    ConfirmationTimeoutError,
    PreconditionError,
    ResponseShapeError,
    RpcError,
    TransportError,
    TxError,
)

# RPC
from .rpc.http import RpcClient  # noqa: F401
from .rpc.rest import RestClient  # noqa: F401

# Addresses
from .address import from_public_key, is_valid, stealth_address  # noqa: F401

# Wallet
from .wallet.signer import Ed25519Signer, Signer  # noqa: F401
from .wallet.manager import WalletManager  # noqa: F401

# Tx helpers
from .tx.lifecycle import TransferLifecycle, TxPhase  # noqa: F401
from .tx.send import await_confirmation  # noqa: F401

# Domain managers
from .staking.client import StakingManager  # noqa: F401
from .governance.client import GovernanceManager  # noqa: F401
from .privacy.client import PrivacyManager  # noqa: F401

# Facade
from .client import ChertClient  # noqa: F401

# Utilities
from .utils.ids import generate_tx_id  # noqa: F401

__all__ = [
    "__version__",
    # Core
    "ClientConfig", "Network", "Context",
    "ChertSdkError", "TransportError", "RpcError", "ResponseShapeError",
    "PreconditionError", "TxError", "ConfirmationTimeoutError", "CancelledError", "APIError",
    # RPC
    "RpcClient", "RestClient",
    # Address
    "from_public_key", "is_valid", "stealth_address",
    # Wallet
    "Ed25519Signer", "Signer", "WalletManager",
    # Tx
    "TransferLifecycle", "TxPhase", "await_confirmation",
    # Managers
    "StakingManager", "GovernanceManager", "PrivacyManager",
    # Facade
    "ChertClient",
    # Utils
    "generate_tx_id",
]
