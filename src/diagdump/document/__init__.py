"""Diagnostic document model and renderer."""

from .base import DiagnosticDocument
from .entries import Entry, EntryKind, Fact, Header, Lines, format_value
from .render import HEADER_TEMPLATE, render_text

__all__ = [
    "HEADER_TEMPLATE",
    "DiagnosticDocument",
    "Entry",
    "EntryKind",
    "Fact",
    "Header",
    "Lines",
    "format_value",
    "render_text",
]
