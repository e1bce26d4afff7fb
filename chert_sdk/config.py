"""
SDK configuration: endpoint, network, request timeout and auth headers.

- Loads sane defaults and supports overrides via environment variables (CHERT_*).
- Provides helpers for building HTTP headers and validating endpoints.
- Configuration is frozen once the client is created.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Union

from .version import USER_AGENT

DEFAULT_ENDPOINT = "https://api.chert.com"
DEFAULT_TIMEOUT = 30.0


class Network(str, Enum):
    MAINNET = "mainnet"
    TESTNET = "testnet"
    DEVNET = "devnet"


def _parse_network(val: Union[str, Network, None], default: Network = Network.MAINNET) -> Network:
    if val is None or val == "":
        return default
    if isinstance(val, Network):
        return val
    try:
        return Network(str(val).strip().lower())
    except ValueError:
        allowed = ", ".join(n.value for n in Network)
        raise ValueError(f"unknown network {val!r} (expected one of: {allowed})") from None


def _parse_timeout(val: Any, default: float = DEFAULT_TIMEOUT) -> float:
    if val is None or val == "" or val == 0:
        return float(default)
    t = float(val)
    if t <= 0:
        raise ValueError(f"timeout must be positive, got {val!r}")
    return t


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    v = os.getenv(name)
    return v if v is not None else default


def _ensure_scheme(url: Optional[str], allowed: tuple[str, ...]) -> Optional[str]:
    if not url:
        return url
    lower = url.lower()
    if not any(lower.startswith(f"{sch}://") for sch in allowed):
        raise ValueError(f"URL must start with {allowed}, got: {url!r}")
    return url


@dataclass(frozen=True, slots=True)
class ClientConfig:
    endpoint: str = DEFAULT_ENDPOINT
    network: Network = Network.MAINNET
    # Seconds, applied per HTTP request
    timeout: float = DEFAULT_TIMEOUT
    # Bearer token for authenticated endpoints
    api_key: Optional[str] = None
    # Extra headers (read-only); merged last so caller values win
    headers: Mapping[str, str] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        # Zero/empty values fall back to defaults
        object.__setattr__(self, "endpoint", (self.endpoint or DEFAULT_ENDPOINT).rstrip("/"))
        object.__setattr__(self, "network", _parse_network(self.network))
        object.__setattr__(self, "timeout", _parse_timeout(self.timeout))
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers or {})))
        _ensure_scheme(self.endpoint, ("http", "https"))

    @classmethod
    def from_env(cls, prefix: str = "CHERT_") -> "ClientConfig":
        """
        Create config from environment variables:

        CHERT_ENDPOINT          (http/https)
        CHERT_NETWORK           (mainnet | testnet | devnet)
        CHERT_TIMEOUT           (float seconds)
        CHERT_API_KEY           (str) optional
        """
        return cls(
            endpoint=_env(f"{prefix}ENDPOINT", DEFAULT_ENDPOINT) or DEFAULT_ENDPOINT,
            network=_parse_network(_env(f"{prefix}NETWORK")),
            timeout=_parse_timeout(_env(f"{prefix}TIMEOUT")),
            api_key=_env(f"{prefix}API_KEY") or None,
        )

    @classmethod
    def with_overrides(
        cls, base: Optional["ClientConfig"] = None, **overrides: Any
    ) -> "ClientConfig":
        """
        Build from an existing config plus keyword overrides.
        Unknown keys are ignored.
        """
        base = base or cls()
        data = base.to_dict()
        data.update({k: v for k, v in overrides.items() if k in data})
        return cls(**data)

    def http_headers(self, *, accept: bool = False) -> Dict[str, str]:
        """
        Headers for outbound requests. `accept=True` adds `Accept` for the
        REST-style helper endpoints.
        """
        headers: Dict[str, str] = {
            "Content-Type": "application/json",
            "User-Agent": USER_AGENT,
        }
        if accept:
            headers["Accept"] = "application/json"
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        headers.update(self.headers)
        return headers

    def to_dict(self) -> Dict[str, Any]:
        return {
            "endpoint": self.endpoint,
            "network": self.network.value,
            "timeout": float(self.timeout),
            "api_key": self.api_key,
            "headers": dict(self.headers),
        }


def default_config() -> ClientConfig:
    """Defaults: public mainnet endpoint, 30s timeout, no auth."""
    return ClientConfig()


__all__ = ["ClientConfig", "Network", "DEFAULT_ENDPOINT", "DEFAULT_TIMEOUT", "default_config"]
