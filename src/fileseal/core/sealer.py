"""Sealer and opener: the two public operations of FileSeal.

Both are plain synchronous functions with no shared state; concurrent calls
never interact. Key material and the plaintext payload live in bytearrays
that are zeroed before returning. This is best effort: Python and the
crypto backend may still hold transient copies.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from .container import (
    DEFAULT_MIME_TYPE,
    FileMetadata,
    decode_header,
    decode_payload,
    encode_header,
    encode_payload,
)
from .exceptions import AuthError, FormatError, OpenError, OpenReason, PolicyError, PolicyReason
from fileseal.security import aead
from fileseal.security.kdf import DEFAULT_KDF_PARAMS, KdfParams, derive_key, generate_salt
from fileseal.security.policy import DEFAULT_POLICY, PasswordPolicy

logger = logging.getLogger(__name__)


class Phase(Enum):
    DERIVING_KEY = "Deriving key..."
    ENCRYPTING = "Encrypting..."
    DECRYPTING = "Decrypting..."
    PARSING = "Reading metadata..."


ProgressCallback = Callable[[Phase], None]


@dataclass(frozen=True)
class SealedFile:
    """The three fields restored by a successful open."""

    data: bytes
    filename: str
    mime_type: str


def _wipe(buf: Optional[bytearray]) -> None:
    if buf is not None:
        buf[:] = bytes(len(buf))


def _report(progress: Optional[ProgressCallback], phase: Phase) -> None:
    logger.debug("phase: %s", phase.name)
    if progress is not None:
        progress(phase)


def seal(
    data: bytes,
    filename: str,
    mime_type: str,
    password: str,
    *,
    policy: Optional[PasswordPolicy] = None,
    params: Optional[KdfParams] = None,
    progress: Optional[ProgressCallback] = None,
) -> bytes:
    """
    Encrypt ``data`` and its metadata into a new container.

    A fresh salt and nonce are drawn for every call, so sealing the same
    input twice gives unrelated containers. ``params`` only exists for
    tests and future versions; containers sealed with non-default params
    can only be opened by passing the same params back to
    :func:`open_container`.
    """
    (policy or DEFAULT_POLICY).check(password)
    if not filename:
        raise PolicyError(PolicyReason.EMPTY_FILENAME, "A file name is required")
    params = params or DEFAULT_KDF_PARAMS

    salt = generate_salt(params.salt_length)
    nonce = aead.generate_nonce()
    metadata = FileMetadata(name=filename, type=mime_type or DEFAULT_MIME_TYPE)

    key = payload = None
    try:
        _report(progress, Phase.DERIVING_KEY)
        key = bytearray(derive_key(password, salt, params))
        payload = encode_payload(metadata, data)

        _report(progress, Phase.ENCRYPTING)
        ciphertext = aead.seal(key, nonce, payload)
    finally:
        _wipe(key)
        _wipe(payload)

    container = encode_header(salt, nonce) + ciphertext
    logger.info("sealed %d bytes into a %d byte container", len(data), len(container))
    return container


def open_container(
    container: bytes,
    password: str,
    *,
    params: Optional[KdfParams] = None,
    progress: Optional[ProgressCallback] = None,
) -> SealedFile:
    """
    Verify and decrypt a container.

    Header problems surface as :class:`FormatError` unchanged. Everything
    after the header is reported through :class:`OpenError`: a failed
    authentication never says whether the password or the data was at
    fault.
    """
    header, ciphertext = decode_header(container)
    params = params or header.kdf_params
    if not password:
        # no key can be derived from an empty password, so nothing can open
        raise OpenError(OpenReason.WRONG_PASSWORD_OR_CORRUPTED)

    key = plaintext = None
    try:
        _report(progress, Phase.DERIVING_KEY)
        key = bytearray(derive_key(password, header.salt, params))

        _report(progress, Phase.DECRYPTING)
        try:
            plaintext = bytearray(aead.open(key, header.nonce, ciphertext))
        except AuthError as e:
            logger.info("open failed: authentication error")
            raise OpenError(OpenReason.WRONG_PASSWORD_OR_CORRUPTED) from e

        _report(progress, Phase.PARSING)
        try:
            metadata, file_bytes = decode_payload(plaintext)
        except FormatError as e:
            logger.warning("open failed: malformed payload (%s)", e.reason.value)
            raise OpenError(OpenReason.MALFORMED_PAYLOAD, str(e)) from e
    finally:
        _wipe(key)
        _wipe(plaintext)

    logger.info("opened container holding %d bytes", len(file_bytes))
    return SealedFile(data=file_bytes, filename=metadata.name, mime_type=metadata.type)
