"""
FileSeal: password-sealed single-file containers.

    >>> blob = fileseal.seal(b"hello", "a.txt", "text/plain", "correcthorse")
    >>> fileseal.open(blob, "correcthorse").data
    b'hello'

The container is ``FILESEAL || version || salt || nonce || AES-GCM(payload)``;
see :mod:`fileseal.core.container` for the byte layout.
"""

from .core.container import (
    DEFAULT_MIME_TYPE,
    HEADER_LEN,
    MAGIC,
    VERSION,
    ContainerInfo,
    FileMetadata,
    inspect,
)
from .core.exceptions import (
    AuthError,
    FileSealError,
    FormatError,
    FormatReason,
    OpenError,
    OpenReason,
    PolicyError,
    PolicyReason,
)
from .core.sealer import Phase, SealedFile, open_container, seal
from .security.kdf import KdfParams
from .security.policy import PasswordPolicy

__version__ = "1.0.0"

open = open_container

__all__ = [
    "seal",
    "open",
    "open_container",
    "inspect",
    "SealedFile",
    "ContainerInfo",
    "FileMetadata",
    "Phase",
    "KdfParams",
    "PasswordPolicy",
    "MAGIC",
    "VERSION",
    "HEADER_LEN",
    "DEFAULT_MIME_TYPE",
    "FileSealError",
    "PolicyError",
    "PolicyReason",
    "FormatError",
    "FormatReason",
    "AuthError",
    "OpenError",
    "OpenReason",
]
