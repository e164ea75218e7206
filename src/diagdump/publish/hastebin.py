"""Hastebin-compatible paste service client."""

from __future__ import annotations

import httpx

from diagdump.errors import PublishError
from diagdump.logging import get_logger

logger = get_logger(__name__)


class HastebinPublisher:
    """Create one paste per call; no retries.

    The service accepts the raw document as the request body and answers
    ``{"key": "<id>"}``; the public link is ``base_url + key``.
    """

    DEFAULT_TIMEOUT = 10.0
    USER_AGENT = "diagdump"

    def __init__(
        self,
        base_url: str,
        *,
        endpoint: str = "documents",
        timeout_seconds: float = DEFAULT_TIMEOUT,
        max_chars: int | None = None,
        token: str | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self.base_url = base_url if base_url.endswith("/") else f"{base_url}/"
        self.endpoint = endpoint.lstrip("/")
        self.timeout_seconds = timeout_seconds
        self.max_chars = max_chars
        self._token = token
        self._client = client

    @property
    def documents_url(self) -> str:
        return f"{self.base_url}{self.endpoint}"

    def publish(self, text: str) -> str:
        if self.max_chars is not None and len(text) > self.max_chars:
            raise PublishError(
                f"Dump is {len(text)} characters; the paste service accepts at most {self.max_chars}."
            )

        headers = {
            "Content-Type": "text/plain; charset=utf-8",
            "User-Agent": self.USER_AGENT,
        }
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"

        try:
            if self._client is not None:
                response = self._post(self._client, text, headers)
            else:
                with httpx.Client(timeout=self.timeout_seconds) as client:
                    response = self._post(client, text, headers)
        except httpx.TimeoutException as exc:
            raise PublishError(f"Timed out after {self.timeout_seconds}s posting to {self.documents_url}.") from exc
        except httpx.HTTPError as exc:
            raise PublishError(f"Could not reach paste service at {self.documents_url}: {exc}") from exc

        if not response.is_success:
            raise PublishError(
                f"Paste service returned HTTP {response.status_code} for {self.documents_url}.",
                status_code=response.status_code,
            )

        key = self._extract_key(response)
        url = f"{self.base_url}{key}"
        logger.info("Published dump (%d chars) to %s", len(text), url)
        return url

    def _post(self, client: httpx.Client, text: str, headers: dict[str, str]) -> httpx.Response:
        logger.debug("Posting %d chars to %s", len(text), self.documents_url)
        return client.post(
            self.documents_url,
            content=text.encode("utf-8", "backslashreplace"),
            headers=headers,
            timeout=self.timeout_seconds,
        )

    def _extract_key(self, response: httpx.Response) -> str:
        try:
            payload = response.json()
        except ValueError as exc:
            raise PublishError(
                "Paste service returned a non-JSON response.", status_code=response.status_code
            ) from exc

        key = payload.get("key") if isinstance(payload, dict) else None
        if not isinstance(key, str) or not key.strip():
            raise PublishError(
                "Paste service response did not include a document key.",
                status_code=response.status_code,
            )
        return key.strip()
