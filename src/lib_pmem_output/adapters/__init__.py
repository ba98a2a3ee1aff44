"""Concrete stream adapters for the printer."""

from __future__ import annotations

from .console.rich_console import RichConsoleAdapter
from .stream import TextStreamAdapter

__all__ = ["RichConsoleAdapter", "TextStreamAdapter"]
