"""Composition helpers turning :class:`RuntimeConfig` into a live printer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TextIO

from lib_pmem_output import config as config_module
from lib_pmem_output.adapters import RichConsoleAdapter, TextStreamAdapter
from lib_pmem_output.application.ports.stream import StreamPort
from lib_pmem_output.application.printer import DEFAULT_COLUMN_WIDTH, DiagnosticHook, Printer


@dataclass(frozen=True)
class RuntimeConfig:
    """Declarative inputs for :func:`lib_pmem_output.runtime.init`.

    ``stream`` accepts a plain text stream (wrapped in
    :class:`TextStreamAdapter`) or a ready :class:`StreamPort` adapter;
    ``None`` writes to standard output.
    """

    verbosity: int = 0
    column_width: int = DEFAULT_COLUMN_WIDTH
    prefix: str | None = None
    stream: TextIO | StreamPort | None = None
    diagnostic_hook: DiagnosticHook = None


def create_stdout() -> StreamPort:
    return RichConsoleAdapter()


def create_stderr() -> StreamPort:
    return RichConsoleAdapter(stderr=True)


def coerce_stream(stream: TextIO | StreamPort | None) -> StreamPort | None:
    """Wrap plain streams so every destination drops write failures.

    >>> from io import StringIO
    >>> coerce_stream(StringIO()).__class__.__name__
    'TextStreamAdapter'
    >>> coerce_stream(None) is None
    True
    """

    if stream is None or isinstance(stream, (TextStreamAdapter, RichConsoleAdapter)):
        return stream
    return TextStreamAdapter(stream)  # type: ignore[arg-type]


def build_printer(runtime_config: RuntimeConfig) -> Printer:
    """Resolve environment overrides and assemble the printer."""

    settings = config_module.resolve_settings(
        verbosity=runtime_config.verbosity,
        column_width=runtime_config.column_width,
        prefix=runtime_config.prefix,
    )
    return Printer(
        verbosity=settings.verbosity,
        column_width=settings.column_width,
        prefix=settings.prefix,
        stream=coerce_stream(runtime_config.stream),
        error_stream=create_stderr(),
        default_stream=create_stdout,
        diagnostic_hook=runtime_config.diagnostic_hook,
    )


__all__ = ["RuntimeConfig", "build_printer", "coerce_stream", "create_stderr", "create_stdout"]
