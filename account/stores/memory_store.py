"""In-memory account stores for local runs and tests."""

from __future__ import annotations

import asyncio
import itertools
import time
from typing import Any

from account.config import AccountConfig
from account.exceptions import UserNotFound


class MemoryUserStore:
    """Users keyed by id, with a lower-cased email index."""

    def __init__(self) -> None:
        self._lock = asyncio.Lock()
        self._users: dict[int, dict[str, Any]] = {}
        self._ids_by_email: dict[str, int] = {}
        self._ids = itertools.count(1)

    async def get_by_email(self, email: str) -> dict | None:
        async with self._lock:
            user_id = self._ids_by_email.get(email.lower())
            return self._snapshot(user_id)

    async def get_by_id(self, user_id: int) -> dict | None:
        async with self._lock:
            return self._snapshot(user_id)

    async def create_user(self, data: dict) -> dict:
        now = int(time.time())
        async with self._lock:
            user = {"created_at": now, "updated_at": now, **data}
            user["id"] = next(self._ids)
            user["email"] = user["email"].lower()
            self._users[user["id"]] = user
            self._ids_by_email[user["email"]] = user["id"]
            return dict(user)

    async def update_user(self, user_id: int, updates: dict) -> dict:
        async with self._lock:
            if user_id not in self._users:
                raise UserNotFound()
            user = self._users[user_id]
            user.update(updates, updated_at=int(time.time()))
            return dict(user)

    def _snapshot(self, user_id: int | None) -> dict | None:
        user = self._users.get(user_id) if user_id is not None else None
        return dict(user) if user else None


class MemoryCodeCache:
    """Process-local code cache; entries expire ``ttl_seconds`` after the last write.

    Expired entries are pruned on every write, and a read of an expired key
    drops it.
    """

    def __init__(self, ttl_seconds: int | None = None) -> None:
        self._lock = asyncio.Lock()
        self._ttl = ttl_seconds if ttl_seconds is not None else AccountConfig.OTP_EXPIRY_MINUTES * 60
        self._entries: dict[str, tuple[str, float]] = {}

    async def set(self, key: str, value: str) -> None:
        now = time.monotonic()
        async with self._lock:
            self._prune(now)
            self._entries[key] = (value, now + self._ttl)

    async def get(self, key: str) -> str | None:
        async with self._lock:
            entry = self._entries.get(key)
            if not entry:
                return None
            value, expires_at = entry
            if time.monotonic() >= expires_at:
                del self._entries[key]
                return None
            return value

    async def delete(self, key: str) -> None:
        async with self._lock:
            self._entries.pop(key, None)

    def _prune(self, now: float) -> None:
        expired = [key for key, (_, expires_at) in self._entries.items() if now >= expires_at]
        for key in expired:
            del self._entries[key]
