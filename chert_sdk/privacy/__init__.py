"""
chert_sdk.privacy
-----------------

Stealth keys, memo encryption and private transfers.
"""

from .client import PrivacyManager  # noqa: F401
from .crypto import (  # noqa: F401
    MemoDecryptionError,
    decrypt_memo,
    derive_shared_secret,
    encrypt_memo,
    generate_stealth_keys,
)

__all__ = [
    "PrivacyManager",
    "MemoDecryptionError",
    "generate_stealth_keys",
    "derive_shared_secret",
    "encrypt_memo",
    "decrypt_memo",
]
