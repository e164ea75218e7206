"""Error taxonomy for stable module boundaries."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path


class DiagDumpError(Exception):
    """Base exception for diagdump."""


class ConfigError(DiagDumpError):
    """Raised when configuration is invalid or missing."""


class CollectError(DiagDumpError):
    """Raised when a host accessor returns data a collector step cannot use."""


class LogFileError(DiagDumpError):
    """Raised when a present log file cannot be turned into lines."""

    def __init__(self, message: str, *, path: Path) -> None:
        super().__init__(message)
        self.path = path


class LogReadError(LogFileError):
    """Raised when a present log file cannot be read from disk."""


class LogDecodeError(LogFileError):
    """Raised when every candidate encoding failed on a log file."""

    def __init__(self, message: str, *, path: Path, encodings: Sequence[str]) -> None:
        super().__init__(message, path=path)
        self.encodings = tuple(encodings)


class PublishError(DiagDumpError):
    """Raised when the paste service did not accept a document."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
