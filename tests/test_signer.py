import pytest

from chert_sdk.errors import PreconditionError
from chert_sdk.types import Account
from chert_sdk.wallet.signer import (
    Ed25519Signer,
    Signer,
    derive_public_key,
    generate_keypair,
    signer_for_account,
    verify_signature,
)


def test_generate_and_derive_round_trip() -> None:
    sk, pk = generate_keypair()
    assert len(bytes.fromhex(sk)) == 32
    assert len(bytes.fromhex(pk)) == 32
    assert derive_public_key(sk) == pk


def test_sign_and_verify() -> None:
    s = Ed25519Signer.from_private_key(b"\x07" * 32)
    assert isinstance(s, Signer)
    sig = s.sign(b"hello")
    assert len(sig) == 64
    assert verify_signature(s.public_key, b"hello", sig)
    assert not verify_signature(s.public_key, b"hellO", sig)
    assert not verify_signature(b"\x00" * 5, b"hello", sig)


def test_domain_separation() -> None:
    s = Ed25519Signer.generate()
    sig = s.sign(b"msg", domain="vote")
    assert s.verify(b"msg", sig, domain="vote")
    assert not s.verify(b"msg", sig)


def test_bad_private_keys() -> None:
    with pytest.raises(ValueError):
        derive_public_key("abcd")
    with pytest.raises(ValueError):
        derive_public_key("not hex at all!")


def test_signer_for_watch_only_account() -> None:
    sk, pk = generate_keypair()
    full = Account(address="chert_" + "a" * 40, public_key=pk, private_key=sk)
    assert signer_for_account(full).public_key_hex == pk

    watch = Account(address="chert_" + "a" * 40, public_key=pk)
    assert watch.is_watch_only
    with pytest.raises(PreconditionError):
        signer_for_account(watch)


def test_repr_hides_private_key() -> None:
    sk, pk = generate_keypair()
    acct = Account(address="chert_" + "a" * 40, public_key=pk, private_key=sk)
    assert sk not in repr(acct)
    assert sk not in repr(Ed25519Signer.from_private_key(sk))
