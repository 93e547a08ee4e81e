"""Short-lived code cache interface."""

from __future__ import annotations

from typing import Protocol


class CodeCache(Protocol):
    """Key/value store whose entries expire after a store-level TTL."""

    async def set(self, key: str, value: str) -> None:
        ...

    async def get(self, key: str) -> str | None:
        ...

    async def delete(self, key: str) -> None:
        ...
