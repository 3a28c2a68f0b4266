"""
Exceptions for FileSeal.

Every failure raised by the codec is a FileSealError carrying a ``reason``
enum member, so callers can branch on the exact cause without parsing
messages. Front ends should only need ``user_message``.
"""

from enum import Enum


class PolicyReason(Enum):
    PASSWORD_TOO_SHORT = "password_too_short"
    EMPTY_FILENAME = "empty_filename"


class FormatReason(Enum):
    # header, readable without the password
    TOO_SHORT = "too_short"
    BAD_MAGIC = "bad_magic"
    UNSUPPORTED_VERSION = "unsupported_version"
    # inner payload, only visible after decryption
    PAYLOAD_TOO_SHORT = "payload_too_short"
    BAD_METADATA_LENGTH = "bad_metadata_length"
    BAD_METADATA = "bad_metadata"


class OpenReason(Enum):
    WRONG_PASSWORD_OR_CORRUPTED = "wrong_password_or_corrupted"
    MALFORMED_PAYLOAD = "malformed_payload"


_NOT_A_CONTAINER = "This file is not a FileSeal container"
_UNSUPPORTED = "This FileSeal version is not supported"
_WRONG_PASSWORD = "Wrong password or corrupted file"

_USER_MESSAGES = {
    PolicyReason.PASSWORD_TOO_SHORT: "Password is too short",
    PolicyReason.EMPTY_FILENAME: "A file name is required",
    FormatReason.TOO_SHORT: _NOT_A_CONTAINER,
    FormatReason.BAD_MAGIC: _NOT_A_CONTAINER,
    FormatReason.UNSUPPORTED_VERSION: _UNSUPPORTED,
    FormatReason.PAYLOAD_TOO_SHORT: "Invalid decrypted payload",
    FormatReason.BAD_METADATA_LENGTH: "Invalid metadata length",
    FormatReason.BAD_METADATA: "Invalid or missing metadata",
    OpenReason.WRONG_PASSWORD_OR_CORRUPTED: _WRONG_PASSWORD,
    OpenReason.MALFORMED_PAYLOAD: "Container decrypted but its contents are malformed",
}


class FileSealError(Exception):
    # general container for errors
    reason = None

    def __init__(self, reason=None, detail: str = ""):
        if reason is not None:
            self.reason = reason
        self.detail = detail
        super().__init__(detail or self.user_message)

    @property
    def user_message(self) -> str:
        return _USER_MESSAGES.get(self.reason, "FileSeal operation failed")


class PolicyError(FileSealError):
    # raised by the sealer before any crypto work happens

    @property
    def user_message(self) -> str:
        return self.detail or _USER_MESSAGES[self.reason]


class FormatError(FileSealError):
    # raised on structural violations in the header or the inner payload
    pass


class AuthError(FileSealError):
    """AEAD authentication failed.

    Deliberately carries no detail: a wrong key, a flipped bit and a
    truncated tag all look the same from the outside.
    """

    def __init__(self):
        super().__init__(None, "authentication failed")

    @property
    def user_message(self) -> str:
        return _WRONG_PASSWORD


class OpenError(FileSealError):
    # caller-facing wrapping of AuthError / payload FormatError on the open path

    @property
    def format_reason(self):
        """The underlying FormatReason for MALFORMED_PAYLOAD, else None."""
        cause = self.__cause__
        if isinstance(cause, FormatError):
            return cause.reason
        return None
