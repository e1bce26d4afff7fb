"""
chert_sdk.wallet.signer
=======================

Ed25519 signers for the Chert SDK.

The transaction lifecycle treats signing as an opaque capability: anything
with a `public_key` (raw bytes) and `sign(message) -> bytes` satisfies the
`Signer` protocol, so hardware or remote signers can be dropped in. The
built-in `Ed25519Signer` wraps `cryptography`'s Ed25519 implementation.

Notes
-----
- Private keys are the raw 32-byte Ed25519 seed, hex-encoded.
- Public keys are the raw 32-byte Ed25519 point, hex-encoded.
- Domain separation is optional at this layer; `tx.encode` already prefixes
  transaction sign-bytes with a domain tag.
"""

from __future__ import annotations

from typing import Optional, Protocol, Tuple, Union, runtime_checkable

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import (
    Ed25519PrivateKey,
    Ed25519PublicKey,
)

from ..errors import PreconditionError
from ..types.core import Account
from ..utils.bytes import from_hex, to_hex

PRIVATE_KEY_BYTES = 32
PUBLIC_KEY_BYTES = 32

__all__ = [
    "Signer",
    "Ed25519Signer",
    "generate_keypair",
    "derive_public_key",
    "verify_signature",
    "signer_for_account",
]


@runtime_checkable
class Signer(Protocol):
    """Minimal signing capability required by the transaction lifecycle."""

    @property
    def public_key(self) -> bytes: ...

    def sign(self, message: bytes) -> bytes: ...


def _with_domain(message: bytes, domain: Optional[Union[str, bytes]]) -> bytes:
    if domain is None:
        return bytes(message)
    tag = domain.encode("utf-8") if isinstance(domain, str) else bytes(domain)
    return b"chert:" + tag + b"|" + bytes(message)


def _raw_public(pk: Ed25519PublicKey) -> bytes:
    return pk.public_bytes(
        encoding=serialization.Encoding.Raw,
        format=serialization.PublicFormat.Raw,
    )


def _load_private(private_key: Union[str, bytes]) -> Ed25519PrivateKey:
    try:
        raw = from_hex(private_key) if isinstance(private_key, str) else bytes(private_key)
    except ValueError as e:
        raise ValueError(f"invalid private key hex: {e}") from e
    if len(raw) != PRIVATE_KEY_BYTES:
        raise ValueError(f"invalid private key length: expected {PRIVATE_KEY_BYTES} bytes, got {len(raw)}")
    return Ed25519PrivateKey.from_private_bytes(raw)


class Ed25519Signer:
    """In-memory Ed25519 signer. The secret never leaves this object unless asked."""

    __slots__ = ("_sk", "_pk")

    def __init__(self, private_key: Ed25519PrivateKey) -> None:
        self._sk = private_key
        self._pk = _raw_public(private_key.public_key())

    # ----- constructors ----------------------------------------------------

    @classmethod
    def generate(cls) -> "Ed25519Signer":
        """Fresh keypair from the OS CSPRNG."""
        return cls(Ed25519PrivateKey.generate())

    @classmethod
    def from_private_key(cls, private_key: Union[str, bytes]) -> "Ed25519Signer":
        """From a raw 32-byte seed (bytes or hex string)."""
        return cls(_load_private(private_key))

    # ----- properties ------------------------------------------------------

    @property
    def public_key(self) -> bytes:
        return self._pk

    @property
    def public_key_hex(self) -> str:
        return to_hex(self._pk)

    def private_key_hex(self) -> str:
        raw = self._sk.private_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PrivateFormat.Raw,
            encryption_algorithm=serialization.NoEncryption(),
        )
        return to_hex(raw)

    # ----- signing ---------------------------------------------------------

    def sign(self, message: bytes, *, domain: Optional[Union[str, bytes]] = None) -> bytes:
        """Return the 64-byte Ed25519 signature over `message`."""
        return self._sk.sign(_with_domain(message, domain))

    def verify(self, message: bytes, signature: bytes, *, domain: Optional[Union[str, bytes]] = None) -> bool:
        return verify_signature(self._pk, _with_domain(message, domain), signature)

    def __repr__(self) -> str:
        return f"Ed25519Signer(public_key={self.public_key_hex})"


def generate_keypair() -> Tuple[str, str]:
    """Return (private_key_hex, public_key_hex) for a fresh Ed25519 keypair."""
    s = Ed25519Signer.generate()
    return s.private_key_hex(), s.public_key_hex


def derive_public_key(private_key_hex: str) -> str:
    """Public key (hex) for an Ed25519 seed (hex). Raises ValueError on bad input."""
    return to_hex(_raw_public(_load_private(private_key_hex).public_key()))


def verify_signature(public_key: Union[str, bytes], message: bytes, signature: bytes) -> bool:
    raw = from_hex(public_key) if isinstance(public_key, str) else bytes(public_key)
    if len(raw) != PUBLIC_KEY_BYTES:
        return False
    try:
        Ed25519PublicKey.from_public_bytes(raw).verify(bytes(signature), bytes(message))
    except InvalidSignature:
        return False
    return True


def signer_for_account(account: Account) -> Ed25519Signer:
    """
    Signing capability for `account`.

    Raises PreconditionError for watch-only accounts (no private key).
    """
    if account.is_watch_only:
        raise PreconditionError("account does not have a private key")
    return Ed25519Signer.from_private_key(account.private_key)
