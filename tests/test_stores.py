import unittest
from unittest.mock import AsyncMock

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from account.exceptions import UserNotFound
from account.stores.memory_store import MemoryCodeCache, MemoryUserStore
from account.stores.postgres_store import PostgresUserStore
from account.stores.redis_store import RedisCodeCache
from db.engine import Base


class TestMemoryCodeCache(unittest.IsolatedAsyncioTestCase):
    async def test_last_write_wins(self):
        cache = MemoryCodeCache(ttl_seconds=60)

        await cache.set("code:a@x.com", "111111")
        await cache.set("code:a@x.com", "222222")

        self.assertEqual(await cache.get("code:a@x.com"), "222222")

    async def test_entries_expire(self):
        cache = MemoryCodeCache(ttl_seconds=0)

        await cache.set("code:a@x.com", "111111")

        self.assertIsNone(await cache.get("code:a@x.com"))

    async def test_missing_key(self):
        self.assertIsNone(await MemoryCodeCache().get("code:nobody@x.com"))

    async def test_write_prunes_unread_expired_entries(self):
        cache = MemoryCodeCache(ttl_seconds=0)
        await cache.set("code:a@x.com", "111111")

        await cache.set("code:b@x.com", "222222")

        self.assertNotIn("code:a@x.com", cache._entries)

    async def test_delete(self):
        cache = MemoryCodeCache(ttl_seconds=60)
        await cache.set("code:a@x.com", "111111")

        await cache.delete("code:a@x.com")
        await cache.delete("code:nobody@x.com")

        self.assertIsNone(await cache.get("code:a@x.com"))


class TestMemoryUserStore(unittest.IsolatedAsyncioTestCase):
    async def test_create_and_update(self):
        store = MemoryUserStore()
        user = await store.create_user({"email": "A@X.com", "hashed_password": "h1"})

        self.assertEqual(user["email"], "a@x.com")
        updated = await store.update_user(user["id"], {"hashed_password": "h2"})
        self.assertEqual(updated["hashed_password"], "h2")
        self.assertEqual((await store.get_by_email("a@x.com"))["hashed_password"], "h2")
        self.assertEqual((await store.get_by_id(user["id"]))["hashed_password"], "h2")

    async def test_update_missing_user(self):
        with self.assertRaises(UserNotFound):
            await MemoryUserStore().update_user(42, {"hashed_password": "h"})

    async def test_ids_are_sequential_and_email_lookup_is_case_insensitive(self):
        store = MemoryUserStore()
        first = await store.create_user({"email": "a@x.com", "hashed_password": "h1"})
        second = await store.create_user({"email": "B@x.com", "hashed_password": "h2"})

        self.assertEqual((first["id"], second["id"]), (1, 2))
        self.assertEqual((await store.get_by_email("b@X.COM"))["id"], 2)
        self.assertIsNone(await store.get_by_email("c@x.com"))
        self.assertIsNone(await store.get_by_id(3))

    async def test_returned_users_are_copies(self):
        store = MemoryUserStore()
        user = await store.create_user({"email": "a@x.com", "hashed_password": "h1"})

        user["hashed_password"] = "tampered"

        self.assertEqual((await store.get_by_id(user["id"]))["hashed_password"], "h1")


class TestRedisCodeCache(unittest.IsolatedAsyncioTestCase):
    async def test_set_uses_ttl(self):
        client = AsyncMock()
        cache = RedisCodeCache(client=client, ttl_seconds=180)

        await cache.set("code:a@x.com", "123456")

        client.setex.assert_awaited_once_with("code:a@x.com", 180, "123456")

    async def test_get_decodes_bytes(self):
        client = AsyncMock()
        client.get.return_value = b"123456"
        cache = RedisCodeCache(client=client, ttl_seconds=180)

        self.assertEqual(await cache.get("code:a@x.com"), "123456")

    async def test_get_missing(self):
        client = AsyncMock()
        client.get.return_value = None
        cache = RedisCodeCache(client=client, ttl_seconds=180)

        self.assertIsNone(await cache.get("code:a@x.com"))

    async def test_delete(self):
        client = AsyncMock()
        cache = RedisCodeCache(client=client, ttl_seconds=180)

        await cache.delete("code:a@x.com")

        client.delete.assert_awaited_once_with("code:a@x.com")


class TestPostgresUserStore(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        engine = create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        Base.metadata.create_all(bind=engine)
        self.store = PostgresUserStore(sessionmaker(bind=engine, autoflush=False))

    async def test_create_get_update(self):
        user = await self.store.create_user(
            {"email": "Student@Hanyang.ac.kr", "name": "Student", "hashed_password": "h1"}
        )

        self.assertEqual(user["email"], "student@hanyang.ac.kr")
        fetched = await self.store.get_by_email("STUDENT@hanyang.ac.kr")
        self.assertEqual(fetched["id"], user["id"])

        updated = await self.store.update_user(user["id"], {"hashed_password": "h2"})
        self.assertEqual(updated["hashed_password"], "h2")
        self.assertEqual((await self.store.get_by_id(user["id"]))["hashed_password"], "h2")

    async def test_missing_user(self):
        self.assertIsNone(await self.store.get_by_email("ghost@hanyang.ac.kr"))
        with self.assertRaises(UserNotFound):
            await self.store.update_user(99, {"hashed_password": "h"})


if __name__ == "__main__":
    unittest.main()
