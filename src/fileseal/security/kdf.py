"""Password-based key derivation for FileSeal containers."""
import os
from dataclasses import dataclass
from typing import Dict

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC


@dataclass(frozen=True)
class KdfParams:
    """Work factor and sizes for one container version.

    Containers do not record these values; they are implied by the version
    byte, so changing them means bumping the version.
    """

    algorithm: str = "pbkdf2-sha256"
    iterations: int = 250_000
    key_length: int = 32
    salt_length: int = 16

    def to_dict(self) -> Dict:
        return {
            "algo": self.algorithm,
            "iterations": self.iterations,
            "key_length": self.key_length,
            "salt_length": self.salt_length,
        }


DEFAULT_KDF_PARAMS = KdfParams()

_HASHES = {
    "pbkdf2-sha256": hashes.SHA256,
}


def generate_salt(length: int = DEFAULT_KDF_PARAMS.salt_length) -> bytes:
    """Return a cryptographically secure random salt.

    Salts must never be reused across two seals; every call to the sealer
    draws a fresh one from here.
    """
    return os.urandom(length)


def derive_key(password, salt: bytes, params: KdfParams = DEFAULT_KDF_PARAMS) -> bytes:
    """
    Derive a symmetric key from a password using PBKDF2-HMAC.
    Returns raw derived key bytes (``params.key_length`` long).
    """
    if isinstance(password, str):
        password = password.encode("utf-8")
    if not password:
        raise ValueError("password must not be empty")
    if len(salt) != params.salt_length:
        raise ValueError(f"salt must be exactly {params.salt_length} bytes, got {len(salt)}")
    try:
        algorithm = _HASHES[params.algorithm]
    except KeyError:
        raise ValueError(f"unsupported KDF algorithm: {params.algorithm}") from None

    kdf = PBKDF2HMAC(
        algorithm=algorithm(),
        length=params.key_length,
        salt=bytes(salt),
        iterations=params.iterations,
    )
    return kdf.derive(password)
