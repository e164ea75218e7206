"""Typed entries of a diagnostic document."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class EntryKind(str, Enum):
    HEADER = "header"
    FACT = "fact"
    LINES = "lines"


@dataclass(frozen=True)
class Header:
    title: str

    @property
    def kind(self) -> EntryKind:
        return EntryKind.HEADER


@dataclass(frozen=True)
class Fact:
    label: str
    value: str

    @property
    def kind(self) -> EntryKind:
        return EntryKind.FACT


@dataclass(frozen=True)
class Lines:
    items: tuple[str, ...] = ()

    @property
    def kind(self) -> EntryKind:
        return EntryKind.LINES


Entry = Header | Fact | Lines


def format_value(value: object) -> str:
    """Stringify a fact value the way it should read in a dump.

    Booleans render as ``true``/``false`` and ``None`` as ``null``; sequences
    belong in a lines block, not a fact.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if isinstance(value, (list, tuple, set, frozenset)):
        raise TypeError("Sequence values must be added as a lines block, not a fact.")
    return str(value)
