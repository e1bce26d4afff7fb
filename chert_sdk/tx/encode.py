"""
chert_sdk.tx.encode
===================

Canonical sign-bytes for transfers.

    sign_bytes = b"chert:tx:v1|" || canonical_json(body)

`canonical_json` is compact, key-sorted UTF-8 JSON, so the same logical
transfer always yields the same bytes regardless of dict ordering.
"""

from __future__ import annotations

import json
from typing import Any, Mapping

SIGN_DOMAIN = b"chert:tx:v1|"


def canonical_json(obj: Mapping[str, Any]) -> bytes:
    return json.dumps(obj, sort_keys=True, separators=(",", ":"), ensure_ascii=False).encode("utf-8")


def build_sign_bytes(body: Mapping[str, Any]) -> bytes:
    """Domain-tagged canonical encoding of an unsigned transfer body."""
    return SIGN_DOMAIN + canonical_json(body)


__all__ = ["SIGN_DOMAIN", "canonical_json", "build_sign_bytes"]
