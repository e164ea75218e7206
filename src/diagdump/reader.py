"""Read log files whose byte encoding is not known in advance."""

from __future__ import annotations

import codecs
from collections.abc import Sequence
from pathlib import Path
import re

from diagdump.errors import ConfigError, LogDecodeError, LogReadError
from diagdump.logging import get_logger

# UTF-8 first, then a Western single-byte codepage, then common CJK codepages.
# latin-1 is excluded since it accepts every byte sequence.
DEFAULT_ENCODINGS = ("utf-8", "cp1252", "shift_jis", "gb18030", "euc_kr")

_LINE_BREAK = re.compile(r"\r\n|\r|\n")
_BOM = "\ufeff"

logger = get_logger(__name__)


def read_log_lines(
    path: str | Path,
    *,
    encodings: Sequence[str] = DEFAULT_ENCODINGS,
) -> tuple[str, ...] | None:
    """Return the lines of ``path`` or ``None`` when the file does not exist.

    Each encoding is tried in order with strict decoding; the first one that
    does not hit a malformed byte sequence wins, even if a different encoding
    would have produced "better" text. Raises ``LogDecodeError`` when every
    encoding fails and ``LogReadError`` on any other OS error, such as a data
    directory that cannot be searched.
    """
    file_path = Path(path)
    if not encodings:
        raise ConfigError("At least one candidate encoding is required.")

    try:
        payload = file_path.read_bytes()
    except FileNotFoundError:
        logger.debug("Log file %s not present; skipping.", file_path)
        return None
    except OSError as exc:
        raise LogReadError(f"Could not read log file '{file_path}': {exc}", path=file_path) from exc

    for encoding in encodings:
        try:
            text = payload.decode(encoding)
        except UnicodeDecodeError:
            logger.debug("Log file %s is not valid %s; trying next encoding.", file_path, encoding)
            continue
        logger.debug("Decoded log file %s as %s.", file_path, encoding)
        return split_lines(text)

    raise LogDecodeError(
        f"Could not decode log file '{file_path}' with any of: {', '.join(encodings)}.",
        path=file_path,
        encodings=encodings,
    )


def split_lines(text: str) -> tuple[str, ...]:
    """Split on CR, LF or CRLF; a trailing terminator adds no empty line."""
    if text.startswith(_BOM):
        text = text[len(_BOM):]
    if not text:
        return ()
    parts = _LINE_BREAK.split(text)
    if parts[-1] == "":
        parts.pop()
    return tuple(parts)


def validate_encodings(encodings: Sequence[str], *, key: str = "logs.encodings") -> tuple[str, ...]:
    if not encodings:
        raise ConfigError(f"Invalid value for '{key}': expected a non-empty list of encodings.")
    resolved: list[str] = []
    for name in encodings:
        if not isinstance(name, str) or not name.strip():
            raise ConfigError(f"Invalid value for '{key}': encodings must be non-empty strings.")
        try:
            codecs.lookup(name.strip())
        except LookupError as exc:
            raise ConfigError(f"Invalid value for '{key}': unknown encoding '{name}'.") from exc
        resolved.append(name.strip())
    return tuple(resolved)
