"""Paste-service publisher behavior against a mocked transport."""

from __future__ import annotations

import httpx
import pytest

from diagdump.config import PasteConfig
from diagdump.errors import PublishError
from diagdump.publish import HastebinPublisher, publisher_from_config


def _client(handler) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler))


def test_publish_posts_raw_text_and_builds_link() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"key": "abcdef"})

    publisher = HastebinPublisher("https://paste.example/", client=_client(handler))
    url = publisher.publish("--- Dump ---\nTime: now\n")

    assert url == "https://paste.example/abcdef"
    assert len(seen) == 1
    assert seen[0].method == "POST"
    assert str(seen[0].url) == "https://paste.example/documents"
    assert seen[0].content == b"--- Dump ---\nTime: now\n"
    assert seen[0].headers["content-type"].startswith("text/plain")


def test_publish_reports_non_success_status_without_retry() -> None:
    calls = 0

    def handler(request: httpx.Request) -> httpx.Response:
        nonlocal calls
        calls += 1
        return httpx.Response(503, text="unavailable")

    publisher = HastebinPublisher("https://paste.example", client=_client(handler))

    with pytest.raises(PublishError, match="HTTP 503") as excinfo:
        publisher.publish("text")
    assert excinfo.value.status_code == 503
    assert calls == 1


def test_publish_wraps_transport_errors() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    publisher = HastebinPublisher("https://paste.example/", client=_client(handler))

    with pytest.raises(PublishError, match="Could not reach paste service"):
        publisher.publish("text")


def test_publish_wraps_timeouts() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("too slow", request=request)

    publisher = HastebinPublisher("https://paste.example/", timeout_seconds=0.5, client=_client(handler))

    with pytest.raises(PublishError, match="Timed out after 0.5s"):
        publisher.publish("text")


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(200, text="not json"),
        httpx.Response(200, json={"id": "abc"}),
        httpx.Response(200, json={"key": ""}),
        httpx.Response(200, json=["abc"]),
    ],
)
def test_publish_rejects_responses_without_key(response: httpx.Response) -> None:
    publisher = HastebinPublisher("https://paste.example/", client=_client(lambda _request: response))

    with pytest.raises(PublishError):
        publisher.publish("text")


def test_publish_rejects_oversized_documents_before_sending() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    publisher = HastebinPublisher("https://paste.example/", max_chars=4, client=_client(handler))

    with pytest.raises(PublishError, match="at most 4"):
        publisher.publish("12345")


def test_publish_sends_bearer_token_when_configured() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.headers["authorization"] == "Bearer s3cret"
        return httpx.Response(201, json={"key": "k1"})

    publisher = HastebinPublisher("https://paste.example/", token="s3cret", client=_client(handler))

    assert publisher.publish("text") == "https://paste.example/k1"


def test_publisher_from_config_reads_token_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PASTE_TOKEN", "from-env")
    config = PasteConfig(
        base_url="https://paste.example/",
        endpoint="api/documents",
        timeout_seconds=3.0,
        max_chars=100,
        token_env="PASTE_TOKEN",
    )

    publisher = publisher_from_config(config)

    assert publisher.documents_url == "https://paste.example/api/documents"
    assert publisher.timeout_seconds == 3.0
    assert publisher.max_chars == 100
    assert publisher._token == "from-env"
