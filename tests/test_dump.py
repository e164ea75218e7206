"""End-to-end dump pipeline outcomes."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path

import httpx

from diagdump.collect.steps import DumpOptions
from diagdump.config import RuntimeConfig
from diagdump.dump import dump_options_from_config, render_dump, run_dump
from diagdump.errors import PublishError
from diagdump.models import DumpFailure
from diagdump.publish import HastebinPublisher
from diagdump.testing import StaticHost


@dataclass
class RecordingPublisher:
    url: str = "https://paste.example/xyz"
    error: PublishError | None = None
    published: list[str] = field(default_factory=list)

    def publish(self, text: str) -> str:
        self.published.append(text)
        if self.error is not None:
            raise self.error
        return self.url


def test_run_dump_publishes_rendered_document(tmp_path: Path) -> None:
    (tmp_path / "Errors.txt").write_text("trace\n", encoding="utf-8")
    publisher = RecordingPublisher()
    host = StaticHost(tmp_path)

    result = run_dump(host, publisher)

    assert result.ok is True
    assert result.url == "https://paste.example/xyz"
    assert publisher.published == [render_dump(host)]
    assert "--- Error Log ---\ntrace\n" in publisher.published[0]


def test_run_dump_reports_publish_failure_without_url(tmp_path: Path) -> None:
    publisher = RecordingPublisher(error=PublishError("HTTP 500", status_code=500))

    result = run_dump(StaticHost(tmp_path), publisher)

    assert result.ok is False
    assert result.url is None
    assert result.failure is DumpFailure.PUBLISH_FAILED
    assert "HTTP 500" in result.message
    assert len(publisher.published) == 1


def test_run_dump_aborts_before_publishing_on_decode_failure(tmp_path: Path) -> None:
    (tmp_path / "Errors.txt").write_bytes(b"\xff\xfe\x81")
    publisher = RecordingPublisher()

    result = run_dump(StaticHost(tmp_path), publisher, options=DumpOptions(encodings=("utf-8",)))

    assert result.failure is DumpFailure.RENDER_INPUT_UNAVAILABLE
    assert result.url is None
    assert publisher.published == []


def test_run_dump_treats_unusable_host_data_as_input_unavailable(tmp_path: Path) -> None:
    publisher = RecordingPublisher()
    host = StaticHost(tmp_path, settings_values={"locale": 5})

    result = run_dump(host, publisher)

    assert result.failure is DumpFailure.RENDER_INPUT_UNAVAILABLE
    assert "locale" in result.message
    assert publisher.published == []


def test_dump_options_follow_config() -> None:
    config = RuntimeConfig()
    options = dump_options_from_config(config)

    assert options.errors_filename == config.logs.errors_filename
    assert options.debug_filename == "DebugLog.txt"
    assert options.encodings == config.logs.encodings
    assert options.time_format == config.app.time_format
    assert options.redact is True


def _hastebin(handler) -> HastebinPublisher:
    return HastebinPublisher(
        "https://paste.example/",
        client=httpx.Client(transport=httpx.MockTransport(handler)),
    )


def test_run_dump_reports_http_error_from_paste_service(tmp_path: Path) -> None:
    publisher = _hastebin(lambda request: httpx.Response(500, text="boom"))

    result = run_dump(StaticHost(tmp_path), publisher)

    assert result.ok is False
    assert result.url is None
    assert result.failure is DumpFailure.PUBLISH_FAILED
    assert "HTTP 500" in result.message


def test_run_dump_publishes_text_with_undecodable_runtime_flags(tmp_path: Path) -> None:
    bodies: list[bytes] = []

    def handler(request: httpx.Request) -> httpx.Response:
        bodies.append(request.content)
        return httpx.Response(200, json={"key": "k"})

    host = StaticHost(tmp_path)
    host.runtime = replace(host.runtime, flags=("-X", "pycache_prefix=/tmp/\udcff"))

    result = run_dump(host, _hastebin(handler))

    assert result.ok is True
    assert result.url == "https://paste.example/k"
    assert b"pycache_prefix=/tmp/\\udcff" in bodies[0]
