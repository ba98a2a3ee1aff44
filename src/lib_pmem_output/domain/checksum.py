"""Fletcher64 checksum used by pool headers.

The checksum runs over little-endian 32-bit words; the 8-byte checksum field
itself contributes zeros. :func:`fletcher64_validator` follows the in-place
contract of the pool format helpers: after the call the checksum field holds
the *expected* value, and the return value tells whether the stored one
matched.
"""

from __future__ import annotations

import struct

CHECKSUM_SIZE = 8
_WORD = struct.Struct("<I")
_CSUM = struct.Struct("<Q")
_MASK32 = 0xFFFFFFFF


def _check_layout(length: int, csum_offset: int) -> None:
    if length % 4:
        raise ValueError(f"checksummed length must be a multiple of 4, got {length}")
    if csum_offset % 4:
        raise ValueError(f"checksum offset must be 4-byte aligned, got {csum_offset}")
    if csum_offset < 0 or csum_offset + CHECKSUM_SIZE > length:
        raise ValueError(f"checksum field at offset {csum_offset} does not fit in {length} bytes")


def fletcher64(data: bytes | bytearray | memoryview, csum_offset: int) -> int:
    """Return the Fletcher64 checksum of ``data`` skipping the checksum field.

    Examples
    --------
    >>> fletcher64(bytes(16), 8)
    0
    >>> hex(fletcher64(b'\\x01\\x00\\x00\\x00' + bytes(12), 8))
    '0x400000001'
    """

    view = memoryview(data).cast("B")
    _check_layout(len(view), csum_offset)
    lo32 = 0
    hi32 = 0
    for pos in range(0, len(view), 4):
        if csum_offset <= pos < csum_offset + CHECKSUM_SIZE:
            word = 0
        else:
            (word,) = _WORD.unpack_from(view, pos)
        lo32 = (lo32 + word) & _MASK32
        hi32 = (hi32 + lo32) & _MASK32
    return (hi32 << 32) | lo32


def read_checksum(buffer: bytes | bytearray | memoryview, csum_offset: int) -> int:
    """Return the stored little-endian 64-bit checksum at ``csum_offset``."""

    return _CSUM.unpack_from(buffer, csum_offset)[0]


def write_checksum(buffer: bytearray | memoryview, csum_offset: int, value: int) -> None:
    """Store ``value`` as a little-endian 64-bit checksum at ``csum_offset``."""

    _CSUM.pack_into(buffer, csum_offset, value)


def fletcher64_validator(buffer: bytearray | memoryview, csum_offset: int) -> bool:
    """Validate the checksum field and leave the expected value in it."""

    stored = read_checksum(buffer, csum_offset)
    expected = fletcher64(buffer, csum_offset)
    write_checksum(buffer, csum_offset, expected)
    return stored == expected


__all__ = [
    "CHECKSUM_SIZE",
    "fletcher64",
    "fletcher64_validator",
    "read_checksum",
    "write_checksum",
]
