"""Process-wide output facade used by the pool inspection commands.

Purpose
-------
Keep the classic call style (``set_verbosity``, ``print_at``,
``print_field``, ``hexdump`` ...) available as module-level functions that
operate on one shared :class:`~lib_pmem_output.application.printer.Printer`.

Contents
--------
* ``init`` / ``shutdown`` - install or discard the shared printer.
* ``set_verbosity``, ``set_column_width``, ``set_prefix``, ``set_stream`` -
  configuration mutators.
* ``check_verbosity``, ``print_error``, ``print_at``, ``print_field``,
  ``hexdump`` - gated printers delegating to the shared printer.
* ``inspect_runtime`` - read-only snapshot of the current configuration.

System Role
-----------
Outer shell over the application layer. The shared printer is created on
first use with defaults (verbosity 0, column width 20, no prefix, standard
output) merged with ``PMEM_OUTPUT_*`` environment overrides. The facade adds
no locking guarantees beyond swapping the singleton; concurrent printing
from several threads interleaves output.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TextIO

from lib_pmem_output.application.ports.stream import StreamPort
from lib_pmem_output.application.printer import Printer
from lib_pmem_output.domain.hexdump import Buffer

from ._composition import RuntimeConfig, build_printer, coerce_stream
from ._state import clear_printer, is_initialised, peek_printer, set_printer


def init(config: RuntimeConfig | None = None) -> Printer:
    """Install a freshly composed printer and return it.

    Raises
    ------
    ValueError
        When an environment override or the prefix/column width is invalid.

    Examples
    --------
    >>> from io import StringIO
    >>> out = StringIO()
    >>> _ = init(RuntimeConfig(verbosity=1, stream=out))
    >>> print_at(1, 'pool ready\\n')
    >>> out.getvalue()
    'pool ready\\n'
    >>> shutdown()
    """

    printer = build_printer(config or RuntimeConfig())
    set_printer(printer)
    return printer


def shutdown() -> None:
    """Discard the shared printer; the next call recreates the defaults."""

    clear_printer()


def current_printer() -> Printer:
    """Return the shared printer, creating it on first use."""

    printer = peek_printer()
    if printer is None:
        printer = init()
    return printer


@dataclass(frozen=True)
class RuntimeSnapshot:
    """Immutable view over the shared printer configuration."""

    verbosity: int
    column_width: int
    prefix: str | None
    stream: StreamPort


def inspect_runtime() -> RuntimeSnapshot:
    """Return a read-only snapshot of the current configuration."""

    printer = current_printer()
    return RuntimeSnapshot(
        verbosity=printer.verbosity,
        column_width=printer.column_width,
        prefix=printer.prefix,
        stream=printer.stream,
    )


def set_verbosity(verbosity: int) -> None:
    """Set the verbosity threshold; binds standard output if no stream is set."""

    current_printer().set_verbosity(verbosity)


def set_column_width(width: int) -> None:
    """Set the label width used by :func:`print_field`; ``0`` disables padding."""

    current_printer().set_column_width(width)


def set_prefix(prefix: str | None) -> None:
    """Set the line prefix written as ``"<prefix>: "``; ``None`` clears it."""

    current_printer().set_prefix(prefix)


def set_stream(stream: TextIO | StreamPort | None) -> None:
    """Redirect gated output; ``None`` restores standard output.

    The stream stays owned by the caller and is never closed here.
    """

    current_printer().set_stream(coerce_stream(stream))


def check_verbosity(level: int) -> bool:
    return current_printer().check_verbosity(level)


def print_error(fmt: str, *args: Any) -> None:
    current_printer().print_error(fmt, *args)


def print_at(level: int, fmt: str, *args: Any) -> None:
    current_printer().print_at(level, fmt, *args)


def print_field(level: int, name: str, fmt: str, *args: Any) -> None:
    current_printer().print_field(level, name, fmt, *args)


def hexdump(level: int, data: Buffer, offset: int = 0, sep: bool = False) -> None:
    current_printer().hexdump(level, data, offset=offset, sep=sep)


__all__ = [
    "RuntimeConfig",
    "RuntimeSnapshot",
    "check_verbosity",
    "current_printer",
    "hexdump",
    "init",
    "inspect_runtime",
    "is_initialised",
    "print_at",
    "print_error",
    "print_field",
    "set_column_width",
    "set_prefix",
    "set_stream",
    "set_verbosity",
    "shutdown",
]
