"""
chert_sdk.staking
-----------------

Staking / delegation client (see .client).
"""

from .client import StakingManager  # noqa: F401

__all__ = ["StakingManager"]
