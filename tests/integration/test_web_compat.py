"""
Compatibility with containers produced by the browser lock/unlock pages.

The web producer uses WebCrypto: PBKDF2-SHA256 (250k iterations) into an
AES-256-GCM key and ``JSON.stringify({name, type})`` for the metadata. These
tests rebuild that byte stream by hand from the primitives, without going
through the FileSeal codec.
"""

import hashlib
import json
import os
import struct

import pytest
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from fileseal.core.sealer import open_container, seal


def _web_lock(file_bytes: bytes, name: str, mime: str, password: str) -> bytes:
    meta = json.dumps({"name": name, "type": mime or "application/octet-stream"}, separators=(",", ":"))
    meta_bytes = meta.encode("utf-8")
    payload = struct.pack(">I", len(meta_bytes)) + meta_bytes + file_bytes

    salt = os.urandom(16)
    iv = os.urandom(12)
    key = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, 250_000, 32)
    ciphertext = AESGCM(key).encrypt(iv, payload, None)
    return b"FILESEAL" + bytes([1]) + salt + iv + ciphertext


def _web_unlock(container: bytes, password: str):
    salt, iv, ct = container[9:25], container[25:37], container[37:]
    key = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, 250_000, 32)
    plaintext = AESGCM(key).decrypt(iv, ct, None)
    (meta_len,) = struct.unpack(">I", plaintext[:4])
    meta = json.loads(plaintext[4:4 + meta_len].decode("utf-8"))
    return plaintext[4 + meta_len:], meta["name"], meta["type"]


@pytest.mark.parametrize("data", [b"", b"hello", os.urandom(4096)])
def test_open_web_produced_container(data):
    container = _web_lock(data, "photo.jpg", "image/jpeg", "correcthorse")
    restored = open_container(container, "correcthorse")
    assert (restored.data, restored.filename, restored.mime_type) == (data, "photo.jpg", "image/jpeg")


def test_web_unlock_reads_our_container():
    container = seal("naïve café".encode("utf-8"), "menu.txt", "text/plain", "correcthorse")
    assert _web_unlock(container, "correcthorse") == ("naïve café".encode("utf-8"), "menu.txt", "text/plain")


def test_same_payload_bytes_as_web_producer():
    """Decrypting our container yields exactly the payload the web page would have built."""
    container = seal(b"hello", "a.txt", "text/plain", "correcthorse")
    salt, iv, ct = container[9:25], container[25:37], container[37:]
    key = hashlib.pbkdf2_hmac("sha256", b"correcthorse", salt, 250_000, 32)
    plaintext = AESGCM(key).decrypt(iv, ct, None)
    assert plaintext == b"\x00\x00\x00\x24" + b'{"name":"a.txt","type":"text/plain"}' + b"hello"
