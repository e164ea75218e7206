"""Fact-gathering steps and the fixed dump configuration flag table."""

from .flags import CONFIGURATION_FLAGS, ConfigurationFlag, FlagKind, resolve_flag_values

__all__ = [
    "CONFIGURATION_FLAGS",
    "ConfigurationFlag",
    "FlagKind",
    "resolve_flag_values",
]
