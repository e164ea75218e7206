"""Credential redaction applied before a dump leaves the machine."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
import re
from typing import Any

REDACTED = "<redacted>"

_SENSITIVE_KEY_MARKERS = (
    "token",
    "password",
    "passwd",
    "secret",
    "cookie",
    "authorization",
    "api_key",
    "apikey",
)
_SENSITIVE_VALUE_PATTERNS = (
    re.compile(r"(?i)(authorization\s*[:=]\s*)((?:bearer|basic)\s+[a-z0-9._~+/=-]+)"),
    re.compile(r"(?i)(set-cookie\s*[:=]\s*)([^;\n]+)"),
    re.compile(r"(?i)\b((?:password|passwd|pwd|secret|api[_-]?key|token)\s*[:=]\s*)([^\s,;\"'<>]+)"),
    re.compile(r"(?i)(\"(?:password|token|secret|api_key)\"\s*:\s*)(\"[^\"]*\")"),
    re.compile(r"(?i)\b(jdbc:[a-z0-9]+://[^:/\s]+:)([^@\s]+)(@)"),
)


def redact_text(value: str) -> str:
    """Mask credential-bearing markers in free-form text."""
    redacted = value
    for pattern in _SENSITIVE_VALUE_PATTERNS:
        redacted = pattern.sub(_replace_with_redacted, redacted)
    return redacted


def redact_lines(lines: Iterable[str]) -> tuple[str, ...]:
    return tuple(redact_text(line) for line in lines)


def redact_mapping(values: Mapping[str, Any]) -> dict[str, Any]:
    """Redact a flat mapping, masking whole values under sensitive keys."""
    sanitized: dict[str, Any] = {}
    for key, child in values.items():
        key_str = str(key)
        if is_sensitive_key(key_str):
            sanitized[key_str] = REDACTED
        elif isinstance(child, str):
            sanitized[key_str] = redact_text(child)
        elif isinstance(child, Mapping):
            sanitized[key_str] = redact_mapping(child)
        else:
            sanitized[key_str] = child
    return sanitized


def is_sensitive_key(key: str) -> bool:
    lowered = key.lower()
    return any(marker in lowered for marker in _SENSITIVE_KEY_MARKERS)


def _replace_with_redacted(match: re.Match[str]) -> str:
    if match.lastindex == 3:
        return f"{match.group(1)}{REDACTED}{match.group(3)}"
    if match.lastindex and match.lastindex >= 1:
        return f"{match.group(1)}{REDACTED}"
    return REDACTED
