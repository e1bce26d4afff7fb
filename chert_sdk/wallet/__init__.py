"""
chert_sdk.wallet
================

Convenience exports for wallet helpers:

- Ed25519 signer and key helpers (generate / derive / verify).
- Unified `Signer` protocol consumed by the transaction lifecycle.

The RPC-backed `WalletManager` lives in `chert_sdk.wallet.manager`.
"""

from .signer import (  # noqa: F401
    Ed25519Signer,
    Signer,
    derive_public_key,
    generate_keypair,
    signer_for_account,
    verify_signature,
)

__all__ = [
    "Signer",
    "Ed25519Signer",
    "generate_keypair",
    "derive_public_key",
    "verify_signature",
    "signer_for_account",
]
