"""FileSeal v1 container format.

Container layout (plaintext header, 37 bytes):
- 8 bytes: magic b'FILESEAL'
- 1 byte: version (1)
- 16 bytes: PBKDF2 salt
- 12 bytes: AES-GCM nonce

Body: AES-GCM ciphertext of the inner payload with the 16-byte tag appended.

Inner payload (after decryption):
- 4 bytes: metadata length L (uint32, big-endian)
- L bytes: metadata JSON (utf-8), ``{"name": ..., "type": ...}``
- remaining bytes: the original file, verbatim

The file has no length field of its own; its length is whatever is left
after the metadata block. Decoders must keep it that way.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass

from .exceptions import FormatError, FormatReason
from .layout import U32_MAX, length_prefixed, pack_u8, split_length_prefixed
from fileseal.security.aead import NONCE_LEN, TAG_LEN
from fileseal.security.kdf import DEFAULT_KDF_PARAMS, KdfParams


MAGIC = b"FILESEAL"
VERSION = 1
DEFAULT_MIME_TYPE = "application/octet-stream"

MAGIC_LEN = len(MAGIC)
VERSION_LEN = 1
SALT_LEN = DEFAULT_KDF_PARAMS.salt_length
HEADER_LEN = MAGIC_LEN + VERSION_LEN + SALT_LEN + NONCE_LEN

# JSON.stringify writes unpaired surrogates as \uXXXX escapes instead of
# failing; filenames decoded with surrogateescape carry exactly those.
_SURROGATE = re.compile("[\ud800-\udfff]")

# version byte -> key derivation parameters implied by that version
SUPPORTED_VERSIONS = {
    VERSION: DEFAULT_KDF_PARAMS,
}


@dataclass(frozen=True)
class ContainerHeader:
    version: int
    salt: bytes
    nonce: bytes

    @property
    def kdf_params(self) -> KdfParams:
        return SUPPORTED_VERSIONS[self.version]


@dataclass(frozen=True)
class ContainerInfo:
    """What can be learned about a container without the password."""

    version: int
    salt: bytes
    nonce: bytes
    ciphertext_length: int

    @property
    def payload_length(self) -> int:
        # length of the encrypted inner payload (metadata block + file)
        return max(0, self.ciphertext_length - TAG_LEN)

    @property
    def total_length(self) -> int:
        return HEADER_LEN + self.ciphertext_length

    def to_dict(self) -> dict:
        return {
            "version": self.version,
            "salt": self.salt.hex(),
            "nonce": self.nonce.hex(),
            "ciphertext_length": self.ciphertext_length,
            "payload_length": self.payload_length,
            "total_length": self.total_length,
            "kdf": SUPPORTED_VERSIONS[self.version].to_dict(),
        }


@dataclass(frozen=True)
class FileMetadata:
    name: str
    type: str = DEFAULT_MIME_TYPE

    def to_bytes(self) -> bytes:
        # Compact JSON, same bytes a browser's JSON.stringify would produce.
        text = json.dumps(
            {"name": self.name, "type": self.type},
            ensure_ascii=False,
            separators=(",", ":"),
        )
        return _SURROGATE.sub(lambda m: "\\u%04x" % ord(m.group()), text).encode("utf-8")

    @classmethod
    def from_bytes(cls, raw: bytes) -> "FileMetadata":
        try:
            meta = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise FormatError(FormatReason.BAD_METADATA, f"metadata is not valid JSON: {e}") from e
        if not isinstance(meta, dict):
            raise FormatError(FormatReason.BAD_METADATA, "metadata is not a JSON object")
        name, mime = meta.get("name"), meta.get("type")
        if not isinstance(name, str) or not name:
            raise FormatError(FormatReason.BAD_METADATA, "metadata is missing the file name")
        if not isinstance(mime, str) or not mime:
            raise FormatError(FormatReason.BAD_METADATA, "metadata is missing the MIME type")
        return cls(name=name, type=mime)


# ----------------------------------------------------------------------
# Header
# ----------------------------------------------------------------------

def encode_header(salt: bytes, nonce: bytes, version: int = VERSION) -> bytes:
    if len(salt) != SALT_LEN:
        raise ValueError(f"salt must be {SALT_LEN} bytes, got {len(salt)}")
    if len(nonce) != NONCE_LEN:
        raise ValueError(f"nonce must be {NONCE_LEN} bytes, got {len(nonce)}")
    return MAGIC + pack_u8(version) + bytes(salt) + bytes(nonce)


def decode_header(container: bytes) -> tuple[ContainerHeader, bytes]:
    """Parse the fixed header and return it with the ciphertext-with-tag."""
    if len(container) < HEADER_LEN:
        raise FormatError(
            FormatReason.TOO_SHORT,
            f"container is {len(container)} bytes, header alone needs {HEADER_LEN}",
        )
    if bytes(container[:MAGIC_LEN]) != MAGIC:
        raise FormatError(FormatReason.BAD_MAGIC, "magic mismatch")
    version = container[MAGIC_LEN]
    if version not in SUPPORTED_VERSIONS:
        raise FormatError(FormatReason.UNSUPPORTED_VERSION, f"unsupported version {version}")

    salt_off = MAGIC_LEN + VERSION_LEN
    nonce_off = salt_off + SALT_LEN
    header = ContainerHeader(
        version=version,
        salt=bytes(container[salt_off:nonce_off]),
        nonce=bytes(container[nonce_off:HEADER_LEN]),
    )
    return header, bytes(container[HEADER_LEN:])


def inspect(container: bytes) -> ContainerInfo:
    header, ciphertext = decode_header(container)
    return ContainerInfo(
        version=header.version,
        salt=header.salt,
        nonce=header.nonce,
        ciphertext_length=len(ciphertext),
    )


# ----------------------------------------------------------------------
# Inner payload
# ----------------------------------------------------------------------

def encode_payload(metadata: FileMetadata, file_bytes: bytes) -> bytearray:
    meta_bytes = metadata.to_bytes()
    if len(meta_bytes) > U32_MAX:
        raise ValueError("metadata block too large")
    payload = bytearray(length_prefixed(meta_bytes))
    payload += file_bytes
    return payload


def decode_payload(plaintext) -> tuple[FileMetadata, bytes]:
    """Split a decrypted payload into its metadata record and the file bytes.

    An empty file is valid: the metadata block may run to the very end.
    """
    meta_bytes, file_bytes = split_length_prefixed(plaintext)
    return FileMetadata.from_bytes(meta_bytes), file_bytes
