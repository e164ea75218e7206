"""Deterministic host and clock fakes for dump tests."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from diagdump.models import AddonInfo, ApplicationDetails, RuntimeDetails, ServerDetails

NowFn = Callable[[], datetime]


def fixed_now(moment: datetime) -> NowFn:
    """Return a clock function that always yields the same aware datetime."""
    if moment.tzinfo is None:
        raise ValueError("datetime value must include tzinfo for deterministic dump timestamps.")

    def _now() -> datetime:
        return moment

    return _now


@dataclass
class StaticHost:
    """DumpHost returning canned values; ``data_path`` is usually a pytest tmp_path."""

    data_path: Path
    clock: NowFn = field(default_factory=lambda: fixed_now(datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)))
    runtime: RuntimeDetails = field(
        default_factory=lambda: RuntimeDetails(
            os_name="Linux",
            os_version="6.1.0",
            os_arch="x86_64",
            runtime_vendor="CPython",
            runtime_version="3.12.1",
            vm_vendor="GCC 12.2.0",
            vm_name="cpython",
            vm_version="3.12.1",
            flags=("-X", "dev"),
        )
    )
    server: ServerDetails = field(
        default_factory=lambda: ServerDetails(
            version="git-Paper-123 (MC: 1.20.4)",
            server_type="Paper",
            addons=(
                AddonInfo("Vault", "1.7.3"),
                AddonInfo("Plan", "4.0.0"),
                AddonInfo("LuckPerms", "5.4.0"),
            ),
        )
    )
    application: ApplicationDetails = field(
        default_factory=lambda: ApplicationDetails(
            name="Plan",
            version="4.0.0",
            framework="Abstract Plugin Framework",
            framework_version="1.2.0",
        )
    )
    settings_values: dict[str, Any] = field(default_factory=dict)
    timing_lines: tuple[str, ...] = ("Analysis: 120ms", "Database init: 45ms")

    def now(self) -> datetime:
        return self.clock()

    def runtime_details(self) -> RuntimeDetails:
        return self.runtime

    def server_details(self) -> ServerDetails:
        return self.server

    def application_details(self) -> ApplicationDetails:
        return self.application

    def settings(self) -> Mapping[str, Any]:
        return self.settings_values

    def timings(self) -> tuple[str, ...]:
        return self.timing_lines

    def data_dir(self) -> Path:
        return self.data_path
