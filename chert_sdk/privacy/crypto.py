"""
chert_sdk.privacy.crypto
========================

Key material and memo encryption for stealth transfers.

- View keys are X25519 keypairs; spend keys are Ed25519 keypairs. All keys
  travel as raw hex.
- The shared secret between two parties is HKDF-SHA256 over the X25519
  exchange of one side's view secret and the other side's view public key, so
  sender and recipient derive the same 32 bytes independently.
- Memos are sealed with ChaCha20-Poly1305; the ciphertext is
  hex(nonce || ciphertext || tag).
"""

from __future__ import annotations

import os

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric.x25519 import X25519PrivateKey, X25519PublicKey
from cryptography.hazmat.primitives.ciphers.aead import ChaCha20Poly1305
from cryptography.hazmat.primitives.kdf.hkdf import HKDF

from ..types.domain import KeyPair, StealthKeys
from ..utils.bytes import from_hex, to_hex
from ..wallet.signer import generate_keypair

SHARED_SECRET_INFO = b"chert:stealth:shared-secret:v1"
MEMO_NONCE_BYTES = 12
KEY_BYTES = 32

__all__ = [
    "MemoDecryptionError",
    "generate_view_keypair",
    "generate_stealth_keys",
    "derive_shared_secret",
    "encrypt_memo",
    "decrypt_memo",
]


class MemoDecryptionError(ValueError):
    """Raised when a memo cannot be authenticated with the given secret."""


def _key(hex_str: str, what: str) -> bytes:
    try:
        raw = from_hex(hex_str)
    except (TypeError, ValueError) as e:
        raise ValueError(f"invalid {what}: {e}") from e
    if len(raw) != KEY_BYTES:
        raise ValueError(f"invalid {what}: expected {KEY_BYTES} bytes, got {len(raw)}")
    return raw


def generate_view_keypair() -> KeyPair:
    sk = X25519PrivateKey.generate()
    secret = sk.private_bytes(
        encoding=serialization.Encoding.Raw,
        format=serialization.PrivateFormat.Raw,
        encryption_algorithm=serialization.NoEncryption(),
    )
    public = sk.public_key().public_bytes(
        encoding=serialization.Encoding.Raw,
        format=serialization.PublicFormat.Raw,
    )
    return KeyPair(public=to_hex(public), secret=to_hex(secret))


def generate_stealth_keys() -> StealthKeys:
    """Fresh view (X25519) and spend (Ed25519) keypairs."""
    spend_secret, spend_public = generate_keypair()
    return StealthKeys(
        view_keypair=generate_view_keypair(),
        spend_keypair=KeyPair(public=spend_public, secret=spend_secret),
    )


def derive_shared_secret(view_secret: str, other_view_public: str) -> str:
    """32-byte shared secret (hex) from our view secret and their view public key."""
    sk = X25519PrivateKey.from_private_bytes(_key(view_secret, "view secret key"))
    pk = X25519PublicKey.from_public_bytes(_key(other_view_public, "view public key"))
    shared = sk.exchange(pk)
    okm = HKDF(algorithm=hashes.SHA256(), length=KEY_BYTES, salt=None, info=SHARED_SECRET_INFO).derive(shared)
    return to_hex(okm)


def encrypt_memo(memo: str, shared_secret: str) -> str:
    aead = ChaCha20Poly1305(_key(shared_secret, "shared secret"))
    nonce = os.urandom(MEMO_NONCE_BYTES)
    return to_hex(nonce + aead.encrypt(nonce, memo.encode("utf-8"), None))


def decrypt_memo(encrypted_memo: str, shared_secret: str) -> str:
    aead = ChaCha20Poly1305(_key(shared_secret, "shared secret"))
    try:
        blob = from_hex(encrypted_memo)
    except ValueError as e:
        raise MemoDecryptionError(f"invalid encrypted memo: {e}") from e
    if len(blob) <= MEMO_NONCE_BYTES:
        raise MemoDecryptionError("encrypted memo is too short")
    try:
        plain = aead.decrypt(blob[:MEMO_NONCE_BYTES], blob[MEMO_NONCE_BYTES:], None)
    except InvalidTag:
        raise MemoDecryptionError("memo authentication failed") from None
    return plain.decode("utf-8")
