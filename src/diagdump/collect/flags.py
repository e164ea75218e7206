"""Host configuration values included in every dump."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from diagdump.errors import CollectError


class FlagKind(str, Enum):
    BOOLEAN = "boolean"
    STRING = "string"
    CHOICE = "choice"


@dataclass(frozen=True)
class ConfigurationFlag:
    key: str
    label: str
    kind: FlagKind
    default: bool | str
    choices: tuple[str, ...] = ()

    def validate(self, value: Any) -> bool | str:
        if self.kind is FlagKind.BOOLEAN:
            if not isinstance(value, bool):
                raise CollectError(f"Setting '{self.key}' must be a boolean, got {type(value).__name__}.")
            return value
        if not isinstance(value, str):
            raise CollectError(f"Setting '{self.key}' must be a string, got {type(value).__name__}.")
        if self.kind is FlagKind.CHOICE and value.lower() not in self.choices:
            allowed = ", ".join(self.choices)
            raise CollectError(f"Setting '{self.key}' must be one of [{allowed}], got '{value}'.")
        return value.lower() if self.kind is FlagKind.CHOICE else value


CONFIGURATION_FLAGS: tuple[ConfigurationFlag, ...] = (
    ConfigurationFlag("webserver_enabled", "Webserver Enabled", FlagKind.BOOLEAN, True),
    ConfigurationFlag("webserver_https", "Webserver HTTPS", FlagKind.BOOLEAN, False),
    ConfigurationFlag("refresh_analysis_on_enable", "Refresh Analysis on Enable", FlagKind.BOOLEAN, True),
    ConfigurationFlag("analysis_export", "Analysis Export", FlagKind.BOOLEAN, False),
    ConfigurationFlag("alternative_server_ip", "Alternative Server IP", FlagKind.BOOLEAN, False),
    ConfigurationFlag("chat_gathering", "Chat Gathering", FlagKind.BOOLEAN, True),
    ConfigurationFlag("kill_gathering", "Kill Gathering", FlagKind.BOOLEAN, True),
    ConfigurationFlag("command_gathering", "Command Gathering", FlagKind.BOOLEAN, True),
    ConfigurationFlag("combine_aliases", "Combine Aliases", FlagKind.BOOLEAN, True),
    ConfigurationFlag("unknown_command_logging", "Unknown Command Logging", FlagKind.BOOLEAN, True),
    ConfigurationFlag("locale", "Locale", FlagKind.STRING, "default"),
    ConfigurationFlag(
        "database_type",
        "Database Type",
        FlagKind.CHOICE,
        "sqlite",
        choices=("sqlite", "mysql", "h2"),
    ),
)

FLAGS_BY_KEY = {flag.key: flag for flag in CONFIGURATION_FLAGS}


def resolve_flag_values(settings: Mapping[str, Any]) -> tuple[tuple[ConfigurationFlag, bool | str], ...]:
    """Pair each known flag with its validated value, falling back to defaults."""
    resolved = []
    for flag in CONFIGURATION_FLAGS:
        raw = settings.get(flag.key, flag.default)
        resolved.append((flag, flag.validate(raw)))
    return tuple(resolved)
