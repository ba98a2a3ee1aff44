"""Adapter writing diagnostics to a caller-owned text stream.

Purpose
-------
Wrap any file-like text object (``sys.stdout``, an open log file, an
``io.StringIO``) so it satisfies :class:`StreamPort`.

System Role
-----------
The stream stays owned by the caller: the adapter never opens, flushes on
close, or closes it. Write failures are dropped because diagnostic output
must not abort the inspection that produced it.
"""

from __future__ import annotations

import logging
from typing import TextIO

from lib_pmem_output.application.ports.stream import StreamPort

logger = logging.getLogger(__name__)


class TextStreamAdapter(StreamPort):
    """Forward text to a wrapped stream, swallowing I/O errors.

    Examples
    --------
    >>> from io import StringIO
    >>> buffer = StringIO()
    >>> TextStreamAdapter(buffer).write('hello\\n')
    6
    >>> buffer.getvalue()
    'hello\\n'
    >>> buffer.close()
    >>> TextStreamAdapter(buffer).write('dropped')
    0
    """

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream

    @property
    def wrapped(self) -> TextIO:
        """Return the underlying stream."""

        return self._stream

    def write(self, text: str) -> int:
        try:
            self._stream.write(text)
        except (OSError, ValueError) as exc:
            logger.debug("write to %r failed: %s", self._stream, exc)
            return 0
        return len(text)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._stream!r})"


__all__ = ["TextStreamAdapter"]
