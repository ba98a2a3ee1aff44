"""Application layer: the printer and the ports it depends on."""

from __future__ import annotations

from .printer import DiagnosticHook, Printer

__all__ = ["DiagnosticHook", "Printer"]
