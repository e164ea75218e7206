"""Host data collaborators consumed by the collector."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from datetime import datetime
from importlib import metadata
from pathlib import Path
import platform
import sys
from typing import Any, Protocol

from diagdump.config import RuntimeConfig, resolve_timezone
from diagdump.errors import LogDecodeError
from diagdump.logging import get_logger
from diagdump.models import AddonInfo, ApplicationDetails, RuntimeDetails, ServerDetails
from diagdump.reader import read_log_lines, split_lines

logger = get_logger(__name__)

NowFn = Callable[[], datetime]


class DumpHost(Protocol):
    def now(self) -> datetime:
        """Return the current wall-clock time with a time zone attached."""

    def runtime_details(self) -> RuntimeDetails:
        """Describe the operating system and language runtime."""

    def server_details(self) -> ServerDetails:
        """Describe the hosting server and its installed add-ons."""

    def application_details(self) -> ApplicationDetails:
        """Describe the application and the framework it is built on."""

    def settings(self) -> Mapping[str, Any]:
        """Return configuration values keyed by configuration flag key."""

    def timings(self) -> tuple[str, ...]:
        """Return pre-formatted timing samples."""

    def data_dir(self) -> Path:
        """Return the directory holding the host's log files."""


class LocalHost:
    """DumpHost backed by the current Python process and a RuntimeConfig."""

    def __init__(
        self,
        config: RuntimeConfig,
        *,
        now: NowFn | None = None,
        addons: tuple[AddonInfo, ...] | None = None,
    ) -> None:
        self._config = config
        self._tz = resolve_timezone(config.app.timezone)
        self._now = now
        self._addons = addons

    def now(self) -> datetime:
        if self._now is not None:
            return self._now().astimezone(self._tz)
        return datetime.now(self._tz)

    def runtime_details(self) -> RuntimeDetails:
        implementation = sys.implementation
        return RuntimeDetails(
            os_name=platform.system() or "unknown",
            os_version=platform.release() or "unknown",
            os_arch=platform.machine() or "unknown",
            runtime_vendor=platform.python_implementation(),
            runtime_version=platform.python_version(),
            vm_vendor=platform.python_compiler() or "unknown",
            vm_name=implementation.name,
            vm_version=_format_version_info(implementation.version),
            flags=interpreter_flags(),
        )

    def server_details(self) -> ServerDetails:
        addons = self._addons if self._addons is not None else installed_distributions()
        return ServerDetails(
            version=self._config.host.server_version,
            server_type=self._config.host.server_type,
            addons=addons,
        )

    def application_details(self) -> ApplicationDetails:
        host = self._config.host
        return ApplicationDetails(
            name=host.name,
            version=host.version,
            framework=host.framework,
            framework_version=host.framework_version,
        )

    def settings(self) -> Mapping[str, Any]:
        return dict(self._config.settings)

    def timings(self) -> tuple[str, ...]:
        filename = self._config.host.timings_filename
        if not filename:
            return ()
        path = self.data_dir() / filename
        encodings = self._config.logs.encodings
        try:
            lines = read_log_lines(path, encodings=encodings)
        except LogDecodeError:
            logger.warning("Timings file %s is not valid %s; decoding with replacement.", path, encodings[0])
            lines = split_lines(path.read_bytes().decode(encodings[0], errors="replace"))
        return lines or ()

    def data_dir(self) -> Path:
        return self._config.host.data_dir


def interpreter_flags(
    orig_argv: list[str] | None = None,
    argv: list[str] | None = None,
) -> tuple[str, ...]:
    """Return the options passed to the interpreter itself, not to the script."""
    full = list(getattr(sys, "orig_argv", []) if orig_argv is None else orig_argv)
    script = list(sys.argv if argv is None else argv)
    end = len(full) - len(script)
    if end <= 1:
        return ()
    return tuple(_printable(arg) for arg in full[1:end])


def installed_distributions() -> tuple[AddonInfo, ...]:
    seen: dict[str, AddonInfo] = {}
    for dist in metadata.distributions():
        name = dist.name
        if not name or name in seen:
            continue
        seen[name] = AddonInfo(name=name, version=dist.version or "unknown")
    return tuple(seen.values())


def _printable(value: str) -> str:
    # argv bytes that are not valid UTF-8 arrive as lone surrogates.
    return value.encode("utf-8", "backslashreplace").decode("utf-8")


def _format_version_info(version: Any) -> str:
    parts = [str(version.major), str(version.minor), str(version.micro)]
    release = ".".join(parts)
    if version.releaselevel != "final":
        release += f"-{version.releaselevel}{version.serial}"
    return release
