"""End-to-end dump pipeline: collect, render, publish."""

from __future__ import annotations

from diagdump.collect.steps import DumpOptions, collect_dump
from diagdump.config import RuntimeConfig
from diagdump.errors import CollectError, LogFileError, PublishError
from diagdump.host import DumpHost
from diagdump.logging import get_logger
from diagdump.models import DumpFailure, PasteResult
from diagdump.publish.base import Publisher

logger = get_logger(__name__)


def dump_options_from_config(config: RuntimeConfig) -> DumpOptions:
    return DumpOptions(
        time_format=config.app.time_format,
        errors_filename=config.logs.errors_filename,
        debug_filename=config.logs.debug_filename,
        encodings=config.logs.encodings,
        redact=config.logs.redact,
    )


def render_dump(host: DumpHost, *, options: DumpOptions | None = None) -> str:
    """Collect and render a dump without publishing it.

    Raises ``LogFileError`` when a present log file cannot be read or decoded
    and ``CollectError`` when the host hands back unusable data.
    """
    return collect_dump(host, options=options).render()


def run_dump(
    host: DumpHost,
    publisher: Publisher,
    *,
    options: DumpOptions | None = None,
) -> PasteResult:
    """Build one dump and publish it, reporting a typed outcome.

    A read or decode failure aborts before the publisher is called. Nothing is
    retried and nothing is written locally.
    """
    try:
        text = render_dump(host, options=options)
    except LogFileError as exc:
        logger.warning("Dump aborted; log file %s unavailable: %s", exc.path, exc)
        return PasteResult.failed(DumpFailure.RENDER_INPUT_UNAVAILABLE, str(exc))
    except CollectError as exc:
        logger.warning("Dump aborted; host data unusable: %s", exc)
        return PasteResult.failed(DumpFailure.RENDER_INPUT_UNAVAILABLE, str(exc))

    try:
        url = publisher.publish(text)
    except PublishError as exc:
        logger.warning("Dump publish failed: %s", exc)
        return PasteResult.failed(DumpFailure.PUBLISH_FAILED, str(exc))

    logger.info("Dump available at %s", url)
    return PasteResult.success(url)
