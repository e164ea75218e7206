"""Plain-text rendering of diagnostic document entries."""

from __future__ import annotations

from collections.abc import Iterable

from diagdump.document.entries import Entry, EntryKind

HEADER_TEMPLATE = "--- {title} ---"


def render_text(entries: Iterable[Entry]) -> str:
    lines: list[str] = []
    for entry in entries:
        if entry.kind is EntryKind.HEADER:
            if lines:
                lines.append("")
            lines.append(HEADER_TEMPLATE.format(title=entry.title))
        elif entry.kind is EntryKind.FACT:
            lines.append(f"{entry.label}: {entry.value}")
        else:
            lines.extend(entry.items)
    if not lines:
        return ""
    return "\n".join(lines) + "\n"
