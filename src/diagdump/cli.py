"""Typer CLI for diagdump workflows."""

from __future__ import annotations

from dataclasses import replace
from enum import IntEnum
import json
from pathlib import Path

import typer

from . import __version__
from .config import (
    RuntimeConfig,
    config_to_dict,
    init_default_config,
    load_runtime_config,
    resolve_config_path,
)
from .dump import dump_options_from_config, render_dump, run_dump
from .errors import CollectError, ConfigError, LogFileError
from .host import LocalHost
from .logging import configure_logging
from .models import DumpFailure, PasteResult
from .publish import publisher_from_config
from .redact import redact_mapping

app = typer.Typer(help="Build a diagnostic dump and publish it to a paste service.")

config_app = typer.Typer(help="Config commands.")

app.add_typer(config_app, name="config")


class DumpExitCode(IntEnum):
    """Stable dump exit code matrix for automation wrappers."""

    SUCCESS = 0
    CONFIG_ERROR = 2
    INPUT_UNAVAILABLE = 3
    PUBLISH_FAILED = 4


@app.command("dump")
def dump(
    ctx: typer.Context,
    path: str | None = typer.Option(
        None, "--path", help="Optional config TOML path (defaults to platform config dir)."
    ),
    data_dir: Path | None = typer.Option(
        None, "--data-dir", help="Directory holding the host's error and debug logs."
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Print the rendered dump instead of publishing it."
    ),
    redact: bool | None = typer.Option(
        None, "--redact/--no-redact", help="Mask credentials in log lines (defaults to logs.redact)."
    ),
    as_json: bool = typer.Option(False, "--json", help="Render the dump outcome as JSON."),
) -> None:
    try:
        config = _apply_overrides(load_runtime_config(path), data_dir=data_dir, redact=redact)
        host = LocalHost(config)
    except ConfigError as exc:
        typer.secho(f"Dump failed: {exc}", err=True, fg=typer.colors.RED)
        raise typer.Exit(int(DumpExitCode.CONFIG_ERROR)) from exc

    if _resolve_debug(ctx) or config.app.debug:
        configure_logging(debug=True)

    options = dump_options_from_config(config)
    if dry_run:
        try:
            typer.echo(render_dump(host, options=options), nl=False)
        except (LogFileError, CollectError) as exc:
            typer.secho(f"Dump failed: {exc}", err=True, fg=typer.colors.RED)
            raise typer.Exit(int(DumpExitCode.INPUT_UNAVAILABLE)) from exc
        return

    result = run_dump(host, publisher_from_config(config.paste), options=options)
    exit_code = determine_dump_exit_code(result)

    if as_json:
        typer.echo(json.dumps(_result_payload(result, exit_code=exit_code), indent=2, sort_keys=True))
    elif result.ok:
        typer.echo(result.url)
    else:
        typer.secho(f"Dump failed: {result.message}", err=True, fg=typer.colors.RED)

    if exit_code is not DumpExitCode.SUCCESS:
        raise typer.Exit(int(exit_code))


@config_app.command("init")
def config_init(
    path: str | None = typer.Option(
        None, "--path", help="Optional config TOML path (defaults to platform config dir)."
    ),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing config file."),
) -> None:
    try:
        written = init_default_config(path, force=force)
    except ConfigError as exc:
        typer.secho(f"Config init failed: {exc}", err=True, fg=typer.colors.RED)
        raise typer.Exit(int(DumpExitCode.CONFIG_ERROR)) from exc

    typer.echo(f"Wrote default config to {written}")


@config_app.command("show")
def config_show(
    path: str | None = typer.Option(
        None, "--path", help="Optional config TOML path (defaults to platform config dir)."
    ),
    as_json: bool = typer.Option(False, "--json", help="Render resolved config as JSON."),
) -> None:
    try:
        resolved_path = resolve_config_path(path)
        config = load_runtime_config(resolved_path)
    except ConfigError as exc:
        typer.secho(f"Config show failed: {exc}", err=True, fg=typer.colors.RED)
        raise typer.Exit(int(DumpExitCode.CONFIG_ERROR)) from exc

    payload = {"path": str(resolved_path), "config": redact_mapping(config_to_dict(config))}
    if as_json:
        typer.echo(json.dumps(payload, indent=2, sort_keys=True))
        return

    typer.echo(f"Config: {resolved_path}")
    for section, values in payload["config"].items():
        typer.echo(f"[{section}]")
        for key, value in values.items():
            typer.echo(f"  {key} = {value}")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(False, "--version", help="Show diagdump version and exit."),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging."),
) -> None:
    ctx.obj = {"debug": debug}
    if debug:
        configure_logging(debug=True)
    if version:
        typer.echo(__version__)
        raise typer.Exit()
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())


def determine_dump_exit_code(result: PasteResult) -> DumpExitCode:
    if result.ok:
        return DumpExitCode.SUCCESS
    if result.failure is DumpFailure.RENDER_INPUT_UNAVAILABLE:
        return DumpExitCode.INPUT_UNAVAILABLE
    return DumpExitCode.PUBLISH_FAILED


def _apply_overrides(
    config: RuntimeConfig,
    *,
    data_dir: Path | None,
    redact: bool | None,
) -> RuntimeConfig:
    if data_dir is not None:
        config = replace(config, host=replace(config.host, data_dir=data_dir.expanduser()))
    if redact is not None:
        config = replace(config, logs=replace(config.logs, redact=redact))
    return config


def _result_payload(result: PasteResult, *, exit_code: DumpExitCode) -> dict[str, object]:
    return {
        "ok": result.ok,
        "url": result.url,
        "failure": result.failure.value if result.failure else None,
        "message": result.message,
        "exit_code": int(exit_code),
        "exit_state": exit_code.name.lower(),
    }


def _resolve_debug(ctx: typer.Context | None) -> bool:
    if ctx is None or not isinstance(ctx.obj, dict):
        return False
    return bool(ctx.obj.get("debug", False))
