"""Static package metadata surfaced by the CLI ``info`` command."""

from __future__ import annotations

from importlib import metadata as _metadata
from typing import Callable

name = "lib_pmem_output"
title = "Diagnostic output and canonical hex dumps for pool inspection tools"
shell_command = "lib_pmem_output"
author = "bitranox"

try:
    version = _metadata.version(name)
except _metadata.PackageNotFoundError:  # pragma: no cover - running from a source tree
    version = "0.0.0+unknown"


def print_info(writer: Callable[[str], None] | None = None) -> None:
    """Emit the metadata banner through ``writer`` (``print`` by default).

    >>> lines = []
    >>> print_info(writer=lines.append)
    >>> lines[0]
    'Info for lib_pmem_output:\\n\\n'
    """

    fields = [
        ("name", name),
        ("title", title),
        ("version", version),
        ("author", author),
        ("shell_command", shell_command),
    ]
    pad = max(len(label) for label, _ in fields)
    emit = writer or (lambda text: print(text, end=""))
    emit(f"Info for {name}:\n\n")
    for label, value in fields:
        emit(f"    {label:<{pad}} = {value}\n")


__all__ = ["author", "name", "print_info", "shell_command", "title", "version"]
