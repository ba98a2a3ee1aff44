"""Rich-powered console adapter implementing :class:`StreamPort`.

Purpose
-------
Default sink for the process-wide printer: standard output for gated
diagnostics and standard error for ``print_error``.

Contents
--------
* :class:`RichConsoleAdapter` - writes raw text to the console file.

System Role
-----------
Text bypasses Rich rendering and goes straight to the console file, so
tabs, carriage returns and other control characters survive and dump lines
keep their exact column layout. The console resolves
``sys.stdout``/``sys.stderr`` at write time, which keeps redirections made
after construction effective.
"""

from __future__ import annotations

import logging

from rich.console import Console

from lib_pmem_output.application.ports.stream import StreamPort

logger = logging.getLogger(__name__)


class RichConsoleAdapter(StreamPort):
    """Write plain text to a Rich console.

    Examples
    --------
    >>> from io import StringIO
    >>> console = Console(file=StringIO(), width=20)
    >>> adapter = RichConsoleAdapter(console=console)
    >>> adapter.write('[bold]00000000  ff ff ff ff ff ff[/bold]\\n')
    41
    >>> console.file.getvalue()
    '[bold]00000000  ff ff ff ff ff ff[/bold]\\n'
    """

    def __init__(self, *, console: Console | None = None, stderr: bool = False) -> None:
        if console is not None:
            self._console = console
        else:
            self._console = Console(stderr=stderr, highlight=False, markup=False, emoji=False, no_color=True)

    @property
    def console(self) -> Console:
        return self._console

    def write(self, text: str) -> int:
        try:
            stream = self._console.file
            stream.write(text)
            stream.flush()
        except (OSError, ValueError) as exc:
            logger.debug("console write failed: %s", exc)
            return 0
        return len(text)


__all__ = ["RichConsoleAdapter"]
