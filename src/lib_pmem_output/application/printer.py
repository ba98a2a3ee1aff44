"""Verbosity-gated printer for pool inspection diagnostics.

Purpose
-------
Carry the output configuration (verbosity threshold, destination stream,
line prefix, field label width) as one object and expose the gated print
operations built on top of it.

Contents
--------
* :class:`Printer` - configuration plus ``print_at``, ``print_field``,
  ``print_error`` and ``hexdump``.
* :data:`DiagnosticHook` - callback signature for internal telemetry.

System Role
-----------
Application layer. The printer formats with the pure domain helpers and
writes through :class:`StreamPort` adapters; the process-wide facade in
:mod:`lib_pmem_output.runtime` holds one instance.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from lib_pmem_output.application.ports.stream import StreamPort
from lib_pmem_output.domain.hexdump import REPEAT_MARKER, Buffer, iter_hexdump, separator_line

logger = logging.getLogger(__name__)

DiagnosticHook = Callable[[str, dict[str, Any]], None] | None
StreamFactory = Callable[[], StreamPort]

DEFAULT_COLUMN_WIDTH = 20
ERROR_LABEL = "error: "


def _interpolate(fmt: str, args: tuple[Any, ...]) -> str:
    return fmt % args if args else fmt


class Printer:
    """Write diagnostics to a stream when the call-site verbosity allows it.

    Parameters
    ----------
    verbosity:
        Threshold; a call at level ``v`` prints when ``verbosity >= v``.
    column_width:
        Width field labels are left-justified to in :meth:`print_field`.
    prefix:
        Optional tool identifier written as ``"<prefix>: "`` before gated lines.
    stream:
        Destination for gated output. When ``None`` the ``default_stream``
        factory binds one on first need.
    error_stream:
        Destination for :meth:`print_error`; standard error in production.
    default_stream:
        Factory returning the standard output sink.
    diagnostic_hook:
        Optional ``(event, payload)`` callback notified about dropped writes.

    Examples
    --------
    >>> class Recorder:
    ...     def __init__(self):
    ...         self.text = ''
    ...     def write(self, text):
    ...         self.text += text
    ...         return len(text)
    >>> out = Recorder()
    >>> printer = Printer(verbosity=1, prefix='pmempool', stream=out, error_stream=Recorder())
    >>> printer.print_field(1, 'Size', '%d', 8)
    >>> out.text
    'pmempool: Size                 : 8\\n'
    >>> printer.print_at(2, 'hidden\\n')
    >>> out.text.count('\\n')
    1
    """

    def __init__(
        self,
        *,
        verbosity: int = 0,
        column_width: int = DEFAULT_COLUMN_WIDTH,
        prefix: str | None = None,
        stream: StreamPort | None = None,
        error_stream: StreamPort,
        default_stream: StreamFactory | None = None,
        diagnostic_hook: DiagnosticHook = None,
    ) -> None:
        if stream is None and default_stream is None:
            raise ValueError("Printer needs either a stream or a default_stream factory")
        self._verbosity = verbosity
        self._column_width = 0
        self._prefix: str | None = None
        self._stream = stream
        self._error_stream = error_stream
        self._default_stream = default_stream
        self._diagnostic_hook = diagnostic_hook
        self.set_column_width(column_width)
        self.set_prefix(prefix)

    @property
    def verbosity(self) -> int:
        return self._verbosity

    @property
    def column_width(self) -> int:
        return self._column_width

    @property
    def prefix(self) -> str | None:
        return self._prefix

    @property
    def stream(self) -> StreamPort:
        """Return the bound destination, binding the default one if needed."""

        if self._stream is None:
            assert self._default_stream is not None
            self._stream = self._default_stream()
        return self._stream

    @property
    def error_stream(self) -> StreamPort:
        return self._error_stream

    def set_verbosity(self, verbosity: int) -> None:
        """Store ``verbosity`` and make sure a stream is bound."""

        self._verbosity = verbosity
        _ = self.stream

    def set_column_width(self, width: int) -> None:
        if width < 0:
            raise ValueError(f"column width must be non-negative, got {width}")
        self._column_width = width

    def set_prefix(self, prefix: str | None) -> None:
        if prefix is not None and ("\n" in prefix or "\r" in prefix):
            raise ValueError("prefix must not contain newline characters")
        self._prefix = prefix

    def set_stream(self, stream: StreamPort | None) -> None:
        """Replace the destination; ``None`` rebinds the default stream."""

        if stream is None:
            if self._default_stream is None:
                raise ValueError("cannot clear the stream without a default_stream factory")
            stream = self._default_stream()
        self._stream = stream

    def check_verbosity(self, level: int) -> bool:
        """Return ``True`` when a call at ``level`` would print."""

        return self._verbosity >= level

    def print_error(self, fmt: str, *args: Any) -> None:
        """Write ``error: <message>`` to the error stream, ignoring verbosity and prefix."""

        self._write(self._error_stream, ERROR_LABEL + _interpolate(fmt, args))

    def print_at(self, level: int, fmt: str, *args: Any) -> None:
        """Write a prefixed message when ``level`` passes the verbosity gate."""

        if self.check_verbosity(level):
            self._write(self.stream, self._prefix_text() + _interpolate(fmt, args))

    def print_field(self, level: int, name: str, fmt: str, *args: Any) -> None:
        """Write ``<name padded> : <value>`` on its own line when gated open.

        Long names are never truncated.
        """

        if self.check_verbosity(level):
            line = "%s%-*s : %s\n" % (self._prefix_text(), self._column_width, name, _interpolate(fmt, args))
            self._write(self.stream, line)

    def hexdump(self, level: int, data: Buffer, offset: int = 0, sep: bool = False) -> None:
        """Write the canonical dump of ``data`` labelled from ``offset``.

        When ``sep`` is set and a row was printed, a dashed rule as wide as
        the last printed row follows the dump.
        """

        if not self.check_verbosity(level) or not len(data):
            return

        stream = self.stream
        last_row_len = 0
        for line in iter_hexdump(data, offset):
            written = self._write(stream, line)
            if line is not REPEAT_MARKER:
                last_row_len = written

        if sep and last_row_len:
            self._write(stream, separator_line(last_row_len))

    def _prefix_text(self) -> str:
        return f"{self._prefix}: " if self._prefix else ""

    def _write(self, stream: StreamPort, text: str) -> int:
        written = stream.write(text)
        if text and not written:
            logger.debug("dropped %d characters of diagnostic output", len(text))
            self._emit_diagnostic("write_failed", {"length": len(text)})
        return written

    def _emit_diagnostic(self, event: str, payload: dict[str, Any]) -> None:
        if self._diagnostic_hook is None:
            return
        try:
            self._diagnostic_hook(event, payload)
        except Exception:  # pragma: no cover - hooks must never break output
            logger.debug("diagnostic hook failed for %s", event, exc_info=True)


__all__ = ["DEFAULT_COLUMN_WIDTH", "DiagnosticHook", "ERROR_LABEL", "Printer"]
