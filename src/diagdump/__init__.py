"""diagdump: build a diagnostic dump and publish it to a paste service."""

from .config import (
    AppConfig,
    HostConfig,
    LogsConfig,
    PasteConfig,
    RuntimeConfig,
    config_to_dict,
    default_config,
    init_default_config,
    load_runtime_config,
    resolve_config_path,
)
from .document import DiagnosticDocument, Fact, Header, Lines
from .dump import render_dump, run_dump
from .models import DumpFailure, PasteResult
from .reader import read_log_lines

__all__ = [
    "AppConfig",
    "DiagnosticDocument",
    "DumpFailure",
    "Fact",
    "Header",
    "HostConfig",
    "Lines",
    "LogsConfig",
    "PasteConfig",
    "PasteResult",
    "RuntimeConfig",
    "config_to_dict",
    "default_config",
    "init_default_config",
    "load_runtime_config",
    "read_log_lines",
    "render_dump",
    "resolve_config_path",
    "run_dump",
]

__version__ = "0.1.0"
