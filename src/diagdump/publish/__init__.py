"""Paste-service publishing."""

from __future__ import annotations

import os

from diagdump.config import PasteConfig
from diagdump.publish.base import Publisher
from diagdump.publish.hastebin import HastebinPublisher


def publisher_from_config(config: PasteConfig) -> HastebinPublisher:
    token = os.getenv(config.token_env) if config.token_env else None
    return HastebinPublisher(
        config.base_url,
        endpoint=config.endpoint,
        timeout_seconds=config.timeout_seconds,
        max_chars=config.max_chars,
        token=token or None,
    )


__all__ = [
    "HastebinPublisher",
    "Publisher",
    "publisher_from_config",
]
