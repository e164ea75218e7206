"""Ordered fact-gathering steps that populate one diagnostic document."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass

from diagdump.collect.flags import resolve_flag_values
from diagdump.config import DEFAULT_TIME_FORMAT
from diagdump.document import DiagnosticDocument, format_value
from diagdump.errors import CollectError
from diagdump.host import DumpHost
from diagdump.logging import get_logger
from diagdump.reader import DEFAULT_ENCODINGS, read_log_lines
from diagdump.redact import redact_lines, redact_text

logger = get_logger(__name__)


@dataclass(frozen=True)
class DumpOptions:
    time_format: str = DEFAULT_TIME_FORMAT
    errors_filename: str = "Errors.txt"
    debug_filename: str = "DebugLog.txt"
    encodings: tuple[str, ...] = DEFAULT_ENCODINGS
    redact: bool = True


DumpStep = Callable[[DiagnosticDocument, DumpHost, DumpOptions], None]


def add_time(document: DiagnosticDocument, host: DumpHost, options: DumpOptions) -> None:
    moment = host.now()
    if moment.tzinfo is None:
        raise CollectError("Host clock returned a naive datetime; a time zone is required.")
    document.add("Time", moment.strftime(options.time_format))


def add_system_details(document: DiagnosticDocument, host: DumpHost, options: DumpOptions) -> None:
    details = host.runtime_details()

    document.add_header("System Details")
    document.add(
        "Operating System",
        f"{details.os_name} ({details.os_arch}) version {details.os_version}",
    )
    document.add("Python Version", f"{details.runtime_version}, {details.runtime_vendor}")
    document.add(
        "Python VM Version",
        f"{details.vm_name} version {details.vm_version}, {details.vm_vendor}",
    )
    document.add("Python VM Flags", format_value(len(details.flags)))
    document.add_lines(_maybe_redact(details.flags, options))


def add_server_details(document: DiagnosticDocument, host: DumpHost, options: DumpOptions) -> None:
    details = host.server_details()
    addons = sorted(addon.describe() for addon in details.addons)

    document.add_header("Server Details")
    document.add("Server Version", details.version)
    document.add("Server Type", details.server_type)

    document.add_header("Plugins")
    document.add_lines(addons)


def add_application_details(document: DiagnosticDocument, host: DumpHost, options: DumpOptions) -> None:
    details = host.application_details()

    document.add_header(f"{details.name} Details")
    document.add(f"{details.name} Version", details.version)
    document.add(f"{details.framework} Version", details.framework_version)


def add_configuration_details(document: DiagnosticDocument, host: DumpHost, options: DumpOptions) -> None:
    name = host.application_details().name
    values = resolve_flag_values(host.settings())

    document.add_header(f"{name} Configuration")
    for flag, value in values:
        rendered = format_value(value)
        document.add(flag.label, redact_text(rendered) if options.redact else rendered)


def add_timings(document: DiagnosticDocument, host: DumpHost, options: DumpOptions) -> None:
    document.add_header("Timings")
    document.add_lines(host.timings())


def add_error_log(document: DiagnosticDocument, host: DumpHost, options: DumpOptions) -> None:
    _add_log_file(document, host, options, filename=options.errors_filename, title="Error Log")


def add_debug_log(document: DiagnosticDocument, host: DumpHost, options: DumpOptions) -> None:
    _add_log_file(document, host, options, filename=options.debug_filename, title="Debug Log")


DUMP_STEPS: tuple[DumpStep, ...] = (
    add_time,
    add_system_details,
    add_server_details,
    add_application_details,
    add_configuration_details,
    add_timings,
    add_error_log,
    add_debug_log,
)


def collect_dump(
    host: DumpHost,
    *,
    options: DumpOptions | None = None,
    steps: Sequence[DumpStep] = DUMP_STEPS,
) -> DiagnosticDocument:
    """Run every step in order against a fresh document.

    ``LogFileError`` from the log steps propagates; no partial document is
    returned in that case.
    """
    resolved = options or DumpOptions()
    document = DiagnosticDocument()
    for step in steps:
        logger.debug("Running dump step %s.", getattr(step, "__name__", repr(step)))
        step(document, host, resolved)
    logger.debug("Collected %d dump entries.", len(document))
    return document


def _add_log_file(
    document: DiagnosticDocument,
    host: DumpHost,
    options: DumpOptions,
    *,
    filename: str,
    title: str,
) -> None:
    lines = read_log_lines(host.data_dir() / filename, encodings=options.encodings)
    if lines is None:
        return

    document.add_header(title)
    document.add_lines(_maybe_redact(lines, options))


def _maybe_redact(lines: Sequence[str], options: DumpOptions) -> tuple[str, ...]:
    return redact_lines(lines) if options.redact else tuple(lines)
