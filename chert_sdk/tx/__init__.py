"""
chert_sdk.tx
------------

Transaction construction, signing, submission and confirmation tracking.
"""

from .build import SignedTransfer, UnsignedTransfer, build_transfer  # noqa: F401
from .encode import build_sign_bytes, canonical_json  # noqa: F401
from .lifecycle import TransferLifecycle, TxPhase  # noqa: F401
from .send import (  # noqa: F401
    await_confirmation,
    get_transaction,
    sign_transfer,
    submit_transfer,
)

__all__ = [
    "UnsignedTransfer",
    "SignedTransfer",
    "build_transfer",
    "build_sign_bytes",
    "canonical_json",
    "TxPhase",
    "TransferLifecycle",
    "sign_transfer",
    "submit_transfer",
    "get_transaction",
    "await_confirmation",
]
