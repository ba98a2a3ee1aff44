"""Canonical hex+ASCII dump with run-length elision of repeated rows.

Purpose
-------
Render arbitrary byte buffers in the ``hexdump -C`` layout used by the pool
inspection tool::

    00000100  48 65 6c 6c 6f 0a                                |Hello.          |

Contents
--------
* :func:`format_hex_row` / :func:`format_ascii_row` - column assemblers.
* :func:`format_row` - one complete, padded dump line.
* :func:`iter_hexdump` - lazy line generator applying ``*`` elision.
* :func:`separator_line` - divider matching a dump line's width.

System Role
-----------
Pure rendering core. :class:`lib_pmem_output.application.printer.Printer`
gates it by verbosity and writes the lines to the configured stream.

Elision rules
-------------
A row equal to the most recently *printed* row (compared over the current
row's length) collapses into a single ``*`` marker line; further equal rows
print nothing until a differing row arrives. The first and the last row of a
buffer always print literally.
"""

from __future__ import annotations

from collections.abc import Iterator

HEXDUMP_ROW_WIDTH = 16
HEXDUMP_ROW_HEX_LEN = HEXDUMP_ROW_WIDTH * 3 + 1
HEXDUMP_ROW_ASCII_LEN = HEXDUMP_ROW_WIDTH
HEXDUMP_LINE_LEN = 8 + 2 + HEXDUMP_ROW_HEX_LEN + 1 + HEXDUMP_ROW_ASCII_LEN + 2
SEPARATOR_CHAR = "-"
REPEAT_MARKER = "*\n"

Buffer = bytes | bytearray | memoryview


def printable_ascii(byte: int) -> str:
    """Return the character for ``byte`` or ``.`` when it is not printable ASCII."""

    return chr(byte) if 0x20 <= byte < 0x7F else "."


def _check_row(row: Buffer) -> None:
    if len(row) > HEXDUMP_ROW_WIDTH:
        raise ValueError(f"dump row holds at most {HEXDUMP_ROW_WIDTH} bytes, got {len(row)}")


def format_hex_row(row: Buffer) -> str:
    """Return the hex column for ``row``: ``%02x `` tokens, split after byte 8.

    >>> format_hex_row(b'Hello\\n')
    '48 65 6c 6c 6f 0a '
    >>> format_hex_row(bytes(range(9)))
    '00 01 02 03 04 05 06 07  08 '
    """

    _check_row(row)
    parts = []
    for index, byte in enumerate(row):
        if index and index % 8 == 0:
            parts.append(" ")
        parts.append("%02x " % byte)
    return "".join(parts)


def format_ascii_row(row: Buffer) -> str:
    """Return the printable ASCII column for ``row``.

    >>> format_ascii_row(b'Hi\\x00~\\x7f')
    'Hi.~.'
    """

    _check_row(row)
    return "".join(printable_ascii(byte) for byte in row)


def format_row(offset: int, row: Buffer) -> str:
    """Return one padded dump line labelled with ``offset``.

    >>> format_row(0x100, b'Hello\\n')
    '00000100  48 65 6c 6c 6f 0a                                |Hello.          |\\n'
    """

    return "%08x  %-*s|%-*s|\n" % (
        offset,
        HEXDUMP_ROW_HEX_LEN,
        format_hex_row(row),
        HEXDUMP_ROW_ASCII_LEN,
        format_ascii_row(row),
    )


def iter_hexdump(data: Buffer, offset: int = 0) -> Iterator[str]:
    """Yield the dump lines of ``data``, eliding repeated rows with ``*``.

    Parameters
    ----------
    data:
        Buffer to render; an empty buffer yields nothing.
    offset:
        Value added to each row's start when labelling it.

    Examples
    --------
    >>> lines = list(iter_hexdump(b'\\xff' * 48))
    >>> len(lines), lines[1]
    (3, '*\\n')
    >>> lines[2][:8]
    '00000020'
    """

    view = memoryview(data).cast("B")
    total = len(view)
    prev = 0
    curr = 0
    repeated = False

    while curr < total:
        row_len = min(total - curr, HEXDUMP_ROW_WIDTH)
        is_last = curr + row_len == total
        row = view[curr : curr + row_len]

        if curr and not is_last and view[prev : prev + row_len] == row:
            if not repeated:
                yield REPEAT_MARKER
                repeated = True
        else:
            repeated = False
            yield format_row(offset + curr, row)
            prev = curr

        curr += row_len


def separator_line(width: int = HEXDUMP_LINE_LEN) -> str:
    """Return a divider of ``width - 1`` dashes plus a newline.

    >>> len(separator_line())
    78
    """

    return SEPARATOR_CHAR * (width - 1) + "\n"


__all__ = [
    "HEXDUMP_LINE_LEN",
    "HEXDUMP_ROW_ASCII_LEN",
    "HEXDUMP_ROW_HEX_LEN",
    "HEXDUMP_ROW_WIDTH",
    "REPEAT_MARKER",
    "SEPARATOR_CHAR",
    "format_ascii_row",
    "format_hex_row",
    "format_row",
    "iter_hexdump",
    "printable_ascii",
    "separator_line",
]
