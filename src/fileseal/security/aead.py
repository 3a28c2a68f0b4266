"""AES-256-GCM adapter.

Ciphertexts are ``ciphertext || tag`` (16-byte tag), as produced by
:class:`cryptography.hazmat.primitives.ciphers.aead.AESGCM`. No associated
data is bound: the container header travels unauthenticated.
"""
import os

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from fileseal.core.exceptions import AuthError

KEY_LEN = 32
NONCE_LEN = 12
TAG_LEN = 16


def generate_nonce() -> bytes:
    return os.urandom(NONCE_LEN)


def _cipher(key) -> AESGCM:
    if len(key) != KEY_LEN:
        raise ValueError(f"key must be {KEY_LEN} bytes, got {len(key)}")
    return AESGCM(bytes(key))


def _check_nonce(nonce: bytes) -> None:
    if len(nonce) != NONCE_LEN:
        raise ValueError(f"nonce must be {NONCE_LEN} bytes, got {len(nonce)}")


def seal(key, nonce: bytes, plaintext) -> bytes:
    _check_nonce(nonce)
    return _cipher(key).encrypt(nonce, bytes(plaintext), None)


def open(key, nonce: bytes, ciphertext_with_tag: bytes) -> bytes:
    """Decrypt and verify; any failure is a bare AuthError."""
    _check_nonce(nonce)
    try:
        return _cipher(key).decrypt(nonce, ciphertext_with_tag, None)
    except InvalidTag:
        # wrong key, tampering and truncation are indistinguishable on purpose
        raise AuthError() from None
