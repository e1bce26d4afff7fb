"""
chert_sdk.utils
---------------

Small helpers shared across the SDK: hex/bytes conversion, hashing and
identifier generation.
"""

from .bytes import BytesLike, ensure_bytes, from_hex, to_hex  # noqa: F401
from .hash import sha256, sha256_hex  # noqa: F401
from .ids import generate_tx_id  # noqa: F401

__all__ = ["BytesLike", "ensure_bytes", "from_hex", "to_hex", "sha256", "sha256_hex", "generate_tx_id"]
