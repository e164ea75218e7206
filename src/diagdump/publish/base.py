"""Publishing interfaces."""

from __future__ import annotations

from typing import Protocol


class Publisher(Protocol):
    def publish(self, text: str) -> str:
        """Upload rendered text and return its public URL, or raise PublishError."""
