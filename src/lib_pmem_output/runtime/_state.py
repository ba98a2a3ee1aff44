"""Runtime state container and access helpers."""

from __future__ import annotations

from threading import RLock

from lib_pmem_output.application.printer import Printer

_STATE: Printer | None = None
_STATE_LOCK = RLock()


def set_printer(printer: Printer) -> None:
    """Install ``printer`` as the active singleton."""

    with _STATE_LOCK:
        global _STATE
        _STATE = printer


def clear_printer() -> None:
    """Remove the active printer if present."""

    with _STATE_LOCK:
        global _STATE
        _STATE = None


def peek_printer() -> Printer | None:
    """Return the active printer without creating one."""

    with _STATE_LOCK:
        return _STATE


def is_initialised() -> bool:
    """Return ``True`` when a printer has been installed."""

    with _STATE_LOCK:
        return _STATE is not None


__all__ = ["clear_printer", "is_initialised", "peek_printer", "set_printer"]
