"""Redis-backed code cache."""

from __future__ import annotations

import redis.asyncio as redis

from account.config import AccountConfig


class RedisCodeCache:
    """Stores codes with ``SETEX`` so Redis expires them."""

    def __init__(self, client: redis.Redis | None = None, ttl_seconds: int | None = None) -> None:
        self._client = client or redis.Redis.from_url(AccountConfig.REDIS_URL, decode_responses=True)
        self._ttl = ttl_seconds if ttl_seconds is not None else AccountConfig.OTP_EXPIRY_MINUTES * 60

    async def set(self, key: str, value: str) -> None:
        await self._client.setex(key, self._ttl, value)

    async def get(self, key: str) -> str | None:
        value = await self._client.get(key)
        if value is None:
            return None
        return value.decode("utf-8") if isinstance(value, bytes) else value

    async def delete(self, key: str) -> None:
        await self._client.delete(key)

    async def close(self) -> None:
        await self._client.aclose()
