"""Enumerations and constants shared by the pool output formatters.

Purpose
-------
Give the size modes, pool type tags, and BTT map entry states a single
canonical definition that formatters, the CLI, and tests agree on.

Contents
--------
* :class:`SizeMode` - byte/human/both rendering switch with parsing helpers.
* :class:`PoolType` - pool type tags as stored by the pool format.
* :class:`BttMapState` - flag encodings of a BTT map entry.
* ``BTT_MAP_ENTRY_*`` constants mirroring the on-media BTT layout.

System Role
-----------
Domain vocabulary consumed by :mod:`lib_pmem_output.domain.formatters`.
"""

from __future__ import annotations

from enum import Enum

BTT_MAP_ENTRY_MASK = 0xFFFFFFFF
BTT_MAP_ENTRY_LBA_MASK = 0x3FFFFFFF
BTT_MAP_ENTRY_ERROR = 0x40000000
BTT_MAP_ENTRY_ZERO = 0x80000000
BTT_MAP_ENTRY_NORMAL = 0xC0000000
BTT_MAP_ENTRY_FLAG_MASK = 0xC0000000


class SizeMode(Enum):
    """Select how :func:`format_size` renders a byte count.

    Examples
    --------
    >>> SizeMode.HUMAN.value
    'human'
    >>> SizeMode.from_value(2) is SizeMode.BOTH
    True
    """

    BYTES = "bytes"
    HUMAN = "human"
    BOTH = "both"

    @classmethod
    def from_name(cls, name: str) -> "SizeMode":
        """Return the member matching ``name`` case-insensitively.

        Raises
        ------
        ValueError
            If the name is not recognised.

        Examples
        --------
        >>> SizeMode.from_name(' Human ') is SizeMode.HUMAN
        True
        >>> SizeMode.from_name('kib')
        Traceback (most recent call last):
        ...
        ValueError: Unsupported size mode: 'kib'
        """

        normalized = name.strip().lower()
        for member in cls:
            if member.value == normalized:
                return member
        raise ValueError(f"Unsupported size mode: {name!r}")

    @classmethod
    def from_value(cls, value: "SizeMode | str | int") -> "SizeMode":
        """Coerce enum members, names, or the legacy 0/1/2 switch."""

        if isinstance(value, SizeMode):
            return value
        if isinstance(value, str):
            return cls.from_name(value)
        if isinstance(value, bool):
            return cls.HUMAN if value else cls.BYTES
        if isinstance(value, int):
            if value == 0:
                return cls.BYTES
            if value == 1:
                return cls.HUMAN
            return cls.BOTH
        raise TypeError(f"Cannot interpret {value!r} as a size mode")


class PoolType(Enum):
    """Pool type tags recognised by the inspection tool."""

    NONE = 0x00
    LOG = 0x01
    BLK = 0x02
    OBJ = 0x04
    ALL = 0x0F
    UNKNOWN = 0x80

    @property
    def label(self) -> str:
        """Return the short display name (``log``, ``blk``, ``obj`` or ``unknown``)."""

        return _POOL_TYPE_LABELS.get(self, "unknown")


_POOL_TYPE_LABELS = {
    PoolType.LOG: "log",
    PoolType.BLK: "blk",
    PoolType.OBJ: "obj",
}


class BttMapState(Enum):
    """State encoded in the two high bits of a BTT map entry."""

    INIT = 0
    ERROR = BTT_MAP_ENTRY_ERROR
    ZERO = BTT_MAP_ENTRY_ZERO
    NORMAL = BTT_MAP_ENTRY_NORMAL

    @property
    def tag(self) -> str:
        return self.name.lower()

    @classmethod
    def from_entry(cls, entry: int) -> "BttMapState | None":
        """Return the state of ``entry`` or ``None`` when the flags are not recognised.

        Only the low 32 bits of ``entry`` are considered, as on media.
        """

        flags = entry & BTT_MAP_ENTRY_FLAG_MASK
        try:
            return cls(flags)
        except ValueError:
            return None


__all__ = [
    "BTT_MAP_ENTRY_ERROR",
    "BTT_MAP_ENTRY_FLAG_MASK",
    "BTT_MAP_ENTRY_LBA_MASK",
    "BTT_MAP_ENTRY_MASK",
    "BTT_MAP_ENTRY_NORMAL",
    "BTT_MAP_ENTRY_ZERO",
    "BttMapState",
    "PoolType",
    "SizeMode",
]
