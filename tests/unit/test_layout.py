"""Unit tests for the big-endian byte layout helpers."""

import pytest

from fileseal.core.exceptions import FormatError, FormatReason
from fileseal.core.layout import (
    U32_MAX,
    length_prefixed,
    pack_u8,
    pack_u32,
    split_length_prefixed,
    unpack_u32,
)


def test_pack_u32_is_big_endian():
    assert pack_u32(1) == b"\x00\x00\x00\x01"
    assert pack_u32(0x01020304) == b"\x01\x02\x03\x04"
    assert pack_u32(U32_MAX) == b"\xff\xff\xff\xff"


@pytest.mark.parametrize("value", [-1, U32_MAX + 1])
def test_pack_u32_rejects_out_of_range(value):
    with pytest.raises(ValueError):
        pack_u32(value)


def test_unpack_u32_with_offset():
    assert unpack_u32(b"\xaa\x00\x00\x01\x00", offset=1) == 256


def test_pack_u8():
    assert pack_u8(1) == b"\x01"


def test_length_prefixed_block():
    assert length_prefixed(b"abc") == b"\x00\x00\x00\x03abc"
    assert length_prefixed(b"") == b"\x00\x00\x00\x00"


def test_split_length_prefixed_returns_block_and_rest():
    block, rest = split_length_prefixed(b"\x00\x00\x00\x02hiREST")
    assert block == b"hi"
    assert rest == b"REST"


def test_split_length_prefixed_allows_empty_rest():
    block, rest = split_length_prefixed(bytearray(b"\x00\x00\x00\x02hi"))
    assert block == b"hi"
    assert rest == b""


@pytest.mark.parametrize("buf", [b"", b"\x00", b"\x00\x00\x00"])
def test_split_length_prefixed_too_short(buf):
    with pytest.raises(FormatError) as excinfo:
        split_length_prefixed(buf)
    assert excinfo.value.reason is FormatReason.PAYLOAD_TOO_SHORT


def test_split_length_prefixed_length_overrun():
    with pytest.raises(FormatError) as excinfo:
        split_length_prefixed(b"\x00\x00\x00\x05abcd")
    assert excinfo.value.reason is FormatReason.BAD_METADATA_LENGTH
