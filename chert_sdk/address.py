"""
chert_sdk.address
=================

Address derivation and validation utilities for Chert.

Format
------
Account addresses are a network prefix followed by the hex encoding of the
first 20 bytes of SHA-256 over the raw public key bytes:

    address = prefix || hex(sha256(pubkey)[:20])

Prefixes: mainnet ``chert_``, testnet ``tchert_``, devnet ``dchert_``.

Stealth addresses mix the recipient's view key and spend public key:

    stealth = "stealth_" || hex(sha256(view_key || spend_pubkey)[:20])

Derivation is deterministic; the same key material always yields the same
address.
"""

from __future__ import annotations

import re
from typing import Optional, Tuple, Union

from .config import Network
from .utils.bytes import BytesLike, ensure_bytes
from .utils.hash import sha256

ADDRESS_HASH_BYTES = 20

NETWORK_PREFIXES = {
    Network.MAINNET: "chert_",
    Network.TESTNET: "tchert_",
    Network.DEVNET: "dchert_",
}
STEALTH_PREFIX = "stealth_"

__all__ = [
    "ADDRESS_HASH_BYTES",
    "NETWORK_PREFIXES",
    "STEALTH_PREFIX",
    "AddressError",
    "prefix_for",
    "from_public_key",
    "stealth_address",
    "parse",
    "is_valid",
]

_BODY_RE = re.compile(r"^[0-9a-f]{%d}$" % (ADDRESS_HASH_BYTES * 2))


class AddressError(ValueError):
    """Raised for malformed or invalid addresses/key material."""


def _key_bytes(key: Union[BytesLike, str], what: str) -> bytes:
    try:
        raw = ensure_bytes(key)
    except (TypeError, ValueError) as e:
        raise AddressError(f"invalid {what} hex: {e}") from e
    if not raw:
        raise AddressError(f"{what} is empty")
    return raw


def prefix_for(network: Union[Network, str] = Network.MAINNET) -> str:
    try:
        return NETWORK_PREFIXES[Network(network)]
    except ValueError:
        raise AddressError(f"unknown network: {network!r}") from None


def from_public_key(public_key: Union[BytesLike, str], network: Union[Network, str] = Network.MAINNET) -> str:
    """Derive the account address for `public_key` (raw bytes or hex)."""
    digest = sha256(_key_bytes(public_key, "public key"))
    return prefix_for(network) + digest[:ADDRESS_HASH_BYTES].hex()


def stealth_address(view_key: Union[BytesLike, str], spend_public_key: Union[BytesLike, str]) -> str:
    """Derive a stealth address from a view key and a spend public key."""
    material = _key_bytes(view_key, "view key") + _key_bytes(spend_public_key, "spend public key")
    return STEALTH_PREFIX + sha256(material)[:ADDRESS_HASH_BYTES].hex()


def parse(address: str) -> Tuple[str, bytes]:
    """
    Split an address into (prefix, 20-byte digest).

    Raises AddressError on unknown prefixes or malformed bodies.
    """
    if not isinstance(address, str):
        raise AddressError("address must be a string")
    for prefix in (*NETWORK_PREFIXES.values(), STEALTH_PREFIX):
        if address.startswith(prefix):
            body = address[len(prefix):]
            if not _BODY_RE.match(body):
                raise AddressError(f"malformed address body: {address!r}")
            return prefix, bytes.fromhex(body)
    raise AddressError(f"unknown address prefix: {address!r}")


def is_valid(address: str, network: Optional[Union[Network, str]] = None) -> bool:
    """True if `address` parses (and carries `network`'s prefix, when given)."""
    try:
        prefix, _ = parse(address)
    except AddressError:
        return False
    if network is None:
        return True
    try:
        return prefix == prefix_for(network)
    except AddressError:
        return False
