"""Unit tests for the AES-256-GCM adapter."""

import os

import pytest
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from fileseal.core.exceptions import AuthError
from fileseal.security import aead


@pytest.fixture
def key():
    return os.urandom(32)


@pytest.fixture
def nonce():
    return aead.generate_nonce()


def test_generate_nonce_length():
    assert len(aead.generate_nonce()) == 12
    assert aead.generate_nonce() != aead.generate_nonce()


def test_seal_appends_tag(key, nonce):
    ct = aead.seal(key, nonce, b"hello world")
    assert len(ct) == len(b"hello world") + aead.TAG_LEN


def test_seal_matches_plain_aesgcm_without_aad(key, nonce):
    assert aead.seal(key, nonce, b"data") == AESGCM(key).encrypt(nonce, b"data", None)


def test_roundtrip_accepts_bytearray_key(key, nonce):
    ct = aead.seal(bytearray(key), nonce, bytearray(b"payload"))
    assert aead.open(bytearray(key), nonce, ct) == b"payload"


def test_roundtrip_empty_plaintext(key, nonce):
    ct = aead.seal(key, nonce, b"")
    assert len(ct) == aead.TAG_LEN
    assert aead.open(key, nonce, ct) == b""


def test_open_wrong_key_raises_auth_error(key, nonce):
    ct = aead.seal(key, nonce, b"secret")
    with pytest.raises(AuthError):
        aead.open(os.urandom(32), nonce, ct)


def test_open_tampered_raises_auth_error(key, nonce):
    ct = bytearray(aead.seal(key, nonce, b"secret"))
    ct[0] ^= 0x01
    with pytest.raises(AuthError):
        aead.open(key, nonce, bytes(ct))


@pytest.mark.parametrize("ct", [b"", b"\x00" * 15])
def test_open_shorter_than_tag_raises_auth_error(key, nonce, ct):
    with pytest.raises(AuthError):
        aead.open(key, nonce, ct)


def test_auth_error_carries_no_detail(key, nonce):
    """Wrong key and tampering must be indistinguishable to the caller."""
    ct = aead.seal(key, nonce, b"secret")
    tampered = bytes([ct[0] ^ 0x80]) + ct[1:]

    with pytest.raises(AuthError) as wrong_key:
        aead.open(os.urandom(32), nonce, ct)
    with pytest.raises(AuthError) as bad_data:
        aead.open(key, nonce, tampered)

    assert str(wrong_key.value) == str(bad_data.value)
    assert wrong_key.value.__cause__ is None
    assert bad_data.value.__cause__ is None


def test_rejects_bad_key_and_nonce_sizes(key, nonce):
    with pytest.raises(ValueError, match="key must be 32 bytes"):
        aead.seal(b"\x00" * 16, nonce, b"x")
    with pytest.raises(ValueError, match="nonce must be 12 bytes"):
        aead.seal(key, b"\x00" * 8, b"x")
