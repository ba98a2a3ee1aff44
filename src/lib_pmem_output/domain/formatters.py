"""Scalar formatters producing display strings for pool diagnostics.

Purpose
-------
Turn raw pool values (sizes, percentages, UUIDs, timestamps, checksums, BTT
map entries, pool type tags) into the fixed textual shapes printed by the
inspection tool.

Contents
--------
* :func:`format_percent`, :func:`format_size`, :func:`format_uuid`,
  :func:`format_time`, :func:`format_checksum`, :func:`format_btt_map`,
  :func:`format_pool_type`.

System Role
-----------
Pure domain helpers. Every function returns a freshly built ``str`` so no
result is invalidated by a later call. Only :func:`format_checksum` touches
caller memory, and it restores what it changed before returning.
"""

from __future__ import annotations

import time as _time
import uuid
from collections.abc import Callable
from datetime import datetime

from .checksum import CHECKSUM_SIZE, fletcher64_validator, read_checksum
from .formats import BTT_MAP_ENTRY_LBA_MASK, BTT_MAP_ENTRY_MASK, BttMapState, PoolType, SizeMode

TIME_STR_FMT = "%a %b %d %Y %H:%M:%S"
SIZE_UNITS = ("K", "M", "G", "T")

ChecksumValidator = Callable[[bytearray, int], bool]


def format_percent(perc: float) -> str:
    """Return ``perc`` followed by ``" %"``.

    Tiny positive values switch to scientific notation; zero and values of at
    least 100 drop the decimals.

    Examples
    --------
    >>> format_percent(0.0)
    '0 %'
    >>> format_percent(42.5)
    '42.500000 %'
    >>> format_percent(100.0)
    '100 %'
    >>> format_percent(1e-5)
    '1.000000e-05 %'
    """

    if 0.0 < perc < 0.0001:
        return "%e %%" % perc
    decimals = 0 if perc >= 100.0 or perc == 0.0 else 6
    return "%.*f %%" % (decimals, perc)


def format_size(size: int, mode: SizeMode | str | int = SizeMode.BYTES) -> str:
    """Return ``size`` as plain bytes, a human-readable value, or both.

    Examples
    --------
    >>> format_size(1536, SizeMode.HUMAN)
    '1.5K'
    >>> format_size(1536, 'both')
    '1.5K [1536]'
    >>> format_size(1023, SizeMode.HUMAN)
    '1023'
    """

    if size < 0:
        raise ValueError(f"size must be non-negative, got {size}")
    mode = SizeMode.from_value(mode)
    if mode is SizeMode.BYTES:
        return "%d" % size

    unit = -1
    scaled = float(size)
    while scaled >= 1024 and unit + 1 < len(SIZE_UNITS):
        scaled /= 1024.0
        unit += 1

    if unit < 0:
        return "%d" % size
    if mode is SizeMode.HUMAN:
        return "%.1f%s" % (scaled, SIZE_UNITS[unit])
    return "%.1f%s [%d]" % (scaled, SIZE_UNITS[unit], size)


def format_uuid(value: uuid.UUID | bytes | bytearray) -> str:
    """Return the canonical 36-character lowercase form of a pool UUID.

    >>> format_uuid(bytes(range(16)))
    '00010203-0405-0607-0809-0a0b0c0d0e0f'
    """

    if isinstance(value, uuid.UUID):
        return str(value)
    if len(value) != 16:
        raise ValueError(f"UUID must be 16 bytes, got {len(value)}")
    return str(uuid.UUID(bytes=bytes(value)))


def format_time(value: float | int | datetime) -> str:
    """Return ``value`` rendered in local time, or ``"unknown"`` if it cannot be converted."""

    try:
        if isinstance(value, datetime):
            return value.astimezone().strftime(TIME_STR_FMT)
        return _time.strftime(TIME_STR_FMT, _time.localtime(value))
    except (OverflowError, OSError, ValueError):
        return "unknown"


def format_checksum(
    buffer: bytearray | memoryview,
    csum_offset: int,
    *,
    validator: ChecksumValidator = fletcher64_validator,
) -> str:
    """Validate the checksum stored in ``buffer`` and describe the verdict.

    The validator may overwrite the checksum field with the expected value;
    the original bytes are written back before returning, even when the
    validator raises.

    Parameters
    ----------
    buffer:
        Mutable bytes holding the checksummed structure.
    csum_offset:
        Offset of the 64-bit little-endian checksum field inside ``buffer``.
    validator:
        Callable implementing :class:`ChecksumValidatorPort`.

    Examples
    --------
    >>> buf = bytearray(16)
    >>> format_checksum(buf, 8)
    '0x00000000 [OK]'
    >>> buf[0] = 1
    >>> format_checksum(buf, 8)
    '0x00000000 [wrong! should be: 0x00000001]'
    >>> bytes(buf[8:16]) == bytes(8)
    True
    """

    if csum_offset < 0 or csum_offset + CHECKSUM_SIZE > len(buffer):
        raise ValueError(f"checksum field at offset {csum_offset} does not fit in {len(buffer)} bytes")
    field = slice(csum_offset, csum_offset + CHECKSUM_SIZE)
    original = bytes(buffer[field])
    stored = read_checksum(original, 0)
    try:
        valid = validator(buffer, csum_offset)
        expected = read_checksum(buffer, csum_offset)
    finally:
        buffer[field] = original

    if valid:
        return "0x%08x [OK]" % (stored & 0xFFFFFFFF)
    return "0x%08x [wrong! should be: 0x%08x]" % (stored & 0xFFFFFFFF, expected & 0xFFFFFFFF)


def format_btt_map(entry: int) -> str:
    """Return the LBA and state of a BTT map entry.

    >>> format_btt_map(0x40001234)
    '0x00001234 state: error'
    >>> format_btt_map(0x1234)
    '0x00001234 state: init'
    >>> format_btt_map(0x1_4000_1234)
    '0x00001234 state: error'
    """

    entry &= BTT_MAP_ENTRY_MASK
    state = BttMapState.from_entry(entry)
    tag = state.tag if state is not None else "unknown"
    return "0x%08x state: %s" % (entry & BTT_MAP_ENTRY_LBA_MASK, tag)


def format_pool_type(tag: PoolType | int) -> str:
    """Return ``log``, ``blk``, ``obj`` or ``unknown`` for a pool type tag."""

    if not isinstance(tag, PoolType):
        try:
            tag = PoolType(tag)
        except ValueError:
            return "unknown"
    return tag.label


__all__ = [
    "ChecksumValidator",
    "SIZE_UNITS",
    "TIME_STR_FMT",
    "format_btt_map",
    "format_checksum",
    "format_percent",
    "format_pool_type",
    "format_size",
    "format_time",
    "format_uuid",
]
