"""Public package surface for pool diagnostics output.

Importing :mod:`lib_pmem_output` gives access to the process-wide facade
(``set_verbosity``, ``print_at``, ``print_field``, ``hexdump`` ...), the
scalar formatters, and the :class:`Printer` object for callers that prefer
threading their own configuration through the code.
"""

from __future__ import annotations

from .application.printer import Printer
from .domain.formats import BttMapState, PoolType, SizeMode
from .domain.formatters import (
    format_btt_map,
    format_checksum,
    format_percent,
    format_pool_type,
    format_size,
    format_time,
    format_uuid,
)
from .domain.hexdump import iter_hexdump
from .runtime import (
    RuntimeConfig,
    check_verbosity,
    hexdump,
    init,
    inspect_runtime,
    print_at,
    print_error,
    print_field,
    set_column_width,
    set_prefix,
    set_stream,
    set_verbosity,
    shutdown,
)


def summary_info() -> str:
    """Return the metadata banner printed by the ``info`` command.

    >>> "version" in summary_info()
    True
    """

    from . import __init__conf__

    lines: list[str] = []
    __init__conf__.print_info(writer=lines.append)
    return "".join(lines)


__all__ = [
    "BttMapState",
    "PoolType",
    "Printer",
    "RuntimeConfig",
    "SizeMode",
    "check_verbosity",
    "format_btt_map",
    "format_checksum",
    "format_percent",
    "format_pool_type",
    "format_size",
    "format_time",
    "format_uuid",
    "hexdump",
    "init",
    "inspect_runtime",
    "iter_hexdump",
    "print_at",
    "print_error",
    "print_field",
    "set_column_width",
    "set_prefix",
    "set_stream",
    "set_verbosity",
    "shutdown",
    "summary_info",
]
