"""
chert_sdk.types
---------------

Typed (pydantic) views of the node's JSON shapes. Re-exported here so callers
can `from chert_sdk.types import Transaction, Proposal`.
"""

from .core import *  # noqa: F401,F403
from .core import __all__ as _core_all
from .domain import *  # noqa: F401,F403
from .domain import __all__ as _domain_all

__all__ = list(_core_all) + list(_domain_all)
