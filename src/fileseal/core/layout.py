"""Fixed-width integer and length-prefixed block helpers (all big-endian)."""

import struct

from .exceptions import FormatError, FormatReason

U32_MAX = 0xFFFFFFFF
U32_LEN = 4

_U8 = struct.Struct(">B")
_U32 = struct.Struct(">I")


def pack_u8(value: int) -> bytes:
    return _U8.pack(value)


def pack_u32(value: int) -> bytes:
    if not 0 <= value <= U32_MAX:
        raise ValueError(f"value {value} does not fit in an unsigned 32-bit integer")
    return _U32.pack(value)


def unpack_u32(buf, offset: int = 0) -> int:
    (value,) = _U32.unpack_from(buf, offset)
    return value


def length_prefixed(block: bytes) -> bytes:
    """Return ``uint32_be(len(block)) || block``."""
    return pack_u32(len(block)) + bytes(block)


def split_length_prefixed(buf):
    """
    Split ``buf`` into the leading length-prefixed block and everything after it.

    The trailing bytes carry no length of their own: whatever follows the
    block belongs to the caller, and may be empty.
    """
    if len(buf) < U32_LEN:
        raise FormatError(FormatReason.PAYLOAD_TOO_SHORT, f"need {U32_LEN} bytes, got {len(buf)}")
    length = unpack_u32(buf)
    end = U32_LEN + length
    if end > len(buf):
        raise FormatError(
            FormatReason.BAD_METADATA_LENGTH,
            f"block length {length} exceeds remaining {len(buf) - U32_LEN} bytes",
        )
    return bytes(buf[U32_LEN:end]), bytes(buf[end:])
