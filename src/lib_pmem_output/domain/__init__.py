"""Domain vocabulary and pure renderers for pool diagnostics output."""

from __future__ import annotations

from .checksum import fletcher64, fletcher64_validator
from .formats import BttMapState, PoolType, SizeMode
from .formatters import (
    format_btt_map,
    format_checksum,
    format_percent,
    format_pool_type,
    format_size,
    format_time,
    format_uuid,
)
from .hexdump import iter_hexdump, separator_line

__all__ = [
    "BttMapState",
    "PoolType",
    "SizeMode",
    "fletcher64",
    "fletcher64_validator",
    "format_btt_map",
    "format_checksum",
    "format_percent",
    "format_pool_type",
    "format_size",
    "format_time",
    "format_uuid",
    "iter_hexdump",
    "separator_line",
]
