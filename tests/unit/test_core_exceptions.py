"""Unit tests for the FileSeal error taxonomy."""

import pytest

from fileseal.core.exceptions import (
    AuthError,
    FileSealError,
    FormatError,
    FormatReason,
    OpenError,
    OpenReason,
    PolicyError,
    PolicyReason,
)


@pytest.mark.parametrize("cls", [PolicyError, FormatError, AuthError, OpenError])
def test_all_errors_share_a_base(cls):
    assert issubclass(cls, FileSealError)


@pytest.mark.parametrize(
    "reason, message",
    [
        (FormatReason.TOO_SHORT, "This file is not a FileSeal container"),
        (FormatReason.BAD_MAGIC, "This file is not a FileSeal container"),
        (FormatReason.UNSUPPORTED_VERSION, "This FileSeal version is not supported"),
    ],
)
def test_header_failures_map_to_user_categories(reason, message):
    assert FormatError(reason).user_message == message


def test_every_reason_has_a_user_message():
    for enum in (PolicyReason, FormatReason, OpenReason):
        for reason in enum:
            assert FileSealError(reason).user_message != "FileSeal operation failed"


def test_detail_becomes_the_exception_text():
    err = FormatError(FormatReason.BAD_METADATA, "metadata is missing the file name")
    assert str(err) == "metadata is missing the file name"
    assert err.user_message == "Invalid or missing metadata"


def test_auth_error_message_is_generic():
    err = AuthError()
    assert err.reason is None
    assert err.user_message == OpenError(OpenReason.WRONG_PASSWORD_OR_CORRUPTED).user_message


def test_open_error_exposes_underlying_format_reason():
    try:
        try:
            raise FormatError(FormatReason.BAD_METADATA_LENGTH)
        except FormatError as e:
            raise OpenError(OpenReason.MALFORMED_PAYLOAD) from e
    except OpenError as err:
        assert err.format_reason is FormatReason.BAD_METADATA_LENGTH


def test_open_error_without_cause():
    assert OpenError(OpenReason.WRONG_PASSWORD_OR_CORRUPTED).format_reason is None
