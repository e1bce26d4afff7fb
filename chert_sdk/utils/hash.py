from __future__ import annotations

import hashlib

from .bytes import BytesLike, ensure_bytes, to_hex


def sha256(data: BytesLike) -> bytes:
    """Return the SHA-256 digest of *data*."""
    return hashlib.sha256(ensure_bytes(data)).digest()


def sha256_hex(data: BytesLike, *, prefix: bool = False) -> str:
    return to_hex(sha256(data), prefix=prefix)


__all__ = ["sha256", "sha256_hex"]
