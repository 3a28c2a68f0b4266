"""Security helpers: KDF, AEAD adapter and password policy for FileSeal.

This package provides:
- PBKDF2-HMAC-SHA256 key derivation with an explicit parameter set
- AES-256-GCM encryption/decryption with a single opaque failure mode
- a configurable minimum-length password policy
"""

from .kdf import KdfParams, DEFAULT_KDF_PARAMS, generate_salt, derive_key
from .aead import generate_nonce
from .policy import PasswordPolicy, DEFAULT_POLICY

__all__ = [
    "KdfParams",
    "DEFAULT_KDF_PARAMS",
    "generate_salt",
    "derive_key",
    "generate_nonce",
    "PasswordPolicy",
    "DEFAULT_POLICY",
]
