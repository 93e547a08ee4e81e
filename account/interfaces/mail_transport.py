"""Mail transport interface."""

from __future__ import annotations

from typing import Protocol


class MailTransport(Protocol):
    async def send(self, sender: str, to: str, subject: str, html: str) -> bool:
        ...
