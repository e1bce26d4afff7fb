import uuid

import pytest

from chert_sdk.utils import ensure_bytes, from_hex, generate_tx_id, sha256_hex, to_hex
from chert_sdk.version import USER_AGENT, __version__


def test_hex_helpers() -> None:
    assert to_hex(b"\x01\xff") == "01ff"
    assert to_hex(b"\x01\xff", prefix=True) == "0x01ff"
    assert from_hex("0x01FF") == b"\x01\xff"
    assert ensure_bytes(bytearray(b"ab")) == b"ab"
    with pytest.raises(ValueError):
        from_hex("abc")
    with pytest.raises(ValueError):
        from_hex("zz")
    with pytest.raises(TypeError):
        ensure_bytes(12)  # type: ignore[arg-type]


def test_sha256_hex() -> None:
    assert sha256_hex(b"") == "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"


def test_generate_tx_id_is_uuid4() -> None:
    a, b = generate_tx_id(), generate_tx_id()
    assert a != b
    assert uuid.UUID(a).version == 4


def test_version() -> None:
    assert USER_AGENT.endswith(__version__)
