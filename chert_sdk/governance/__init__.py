"""
chert_sdk.governance
--------------------

On-chain governance client (see .client).
"""

from .client import GovernanceManager  # noqa: F401

__all__ = ["GovernanceManager"]
