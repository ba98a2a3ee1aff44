"""Stream port describing where diagnostic text is written.

Purpose
-------
Give :class:`lib_pmem_output.application.printer.Printer` a narrow sink
contract so tests and hosts can plug in any destination.

Contents
--------
* :class:`StreamPort` - runtime-checkable protocol with a single ``write``.

System Role
-----------
Boundary between the printer and the concrete adapters
(:class:`~lib_pmem_output.adapters.stream.TextStreamAdapter`,
:class:`~lib_pmem_output.adapters.console.rich_console.RichConsoleAdapter`).
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class StreamPort(Protocol):
    """Accept already formatted text.

    Implementations must not raise on I/O failure; they report the number of
    characters handed to the underlying sink (``0`` when the write was
    dropped).

    Examples
    --------
    >>> class Recorder:
    ...     def __init__(self):
    ...         self.chunks = []
    ...     def write(self, text):
    ...         self.chunks.append(text)
    ...         return len(text)
    >>> isinstance(Recorder(), StreamPort)
    True
    """

    def write(self, text: str) -> int:
        """Write ``text`` and return the number of characters accepted."""


__all__ = ["StreamPort"]
