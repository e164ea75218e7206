"""Append-only diagnostic document."""

from __future__ import annotations

from collections.abc import Iterable

from diagdump.document.entries import Entry, Fact, Header, Lines
from diagdump.document.render import render_text


class DiagnosticDocument:
    """Ordered collection of headers, facts and line blocks for one dump.

    Entries are only ever appended; rendering walks them in insertion order.
    Instances are single-owner and not thread-safe.
    """

    def __init__(self) -> None:
        self._entries: list[Entry] = []

    @property
    def entries(self) -> tuple[Entry, ...]:
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def add_header(self, title: str) -> None:
        self._entries.append(Header(title=title))

    def add(self, label: str, value: str) -> None:
        self._entries.append(Fact(label=label, value=value))

    def add_lines(self, items: Iterable[str]) -> None:
        self._entries.append(Lines(items=tuple(items)))

    def render(self) -> str:
        return render_text(self._entries)
