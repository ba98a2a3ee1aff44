"""Protocols describing the printer's outbound dependencies."""

from __future__ import annotations

from .checksum import ChecksumValidatorPort
from .stream import StreamPort

__all__ = ["ChecksumValidatorPort", "StreamPort"]
