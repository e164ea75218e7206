"""Data model contracts for cross-module use."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class DumpFailure(str, Enum):
    RENDER_INPUT_UNAVAILABLE = "render_input_unavailable"
    PUBLISH_FAILED = "publish_failed"


@dataclass(frozen=True)
class PasteResult:
    """Outcome of one dump: a shareable URL or a typed failure."""

    url: str | None = None
    failure: DumpFailure | None = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.url is not None and self.failure is None

    @classmethod
    def success(cls, url: str) -> PasteResult:
        return cls(url=url, message=f"Dump published to {url}")

    @classmethod
    def failed(cls, failure: DumpFailure, message: str) -> PasteResult:
        return cls(url=None, failure=failure, message=message)


@dataclass(frozen=True)
class RuntimeDetails:
    os_name: str
    os_version: str
    os_arch: str
    runtime_vendor: str
    runtime_version: str
    vm_vendor: str
    vm_name: str
    vm_version: str
    flags: tuple[str, ...] = ()


@dataclass(frozen=True)
class AddonInfo:
    name: str
    version: str

    def describe(self) -> str:
        return f"{self.name} {self.version}"


@dataclass(frozen=True)
class ServerDetails:
    version: str
    server_type: str
    addons: tuple[AddonInfo, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class ApplicationDetails:
    name: str
    version: str
    framework: str
    framework_version: str
