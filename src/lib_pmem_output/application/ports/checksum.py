"""Checksum validator port consumed by :func:`format_checksum`."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ChecksumValidatorPort(Protocol):
    """Validate the checksum field embedded in a buffer.

    On return the field at ``csum_offset`` may hold the expected checksum;
    callers that must preserve the stored value restore it themselves.
    """

    def __call__(self, buffer: bytearray, csum_offset: int) -> bool: ...


__all__ = ["ChecksumValidatorPort"]
