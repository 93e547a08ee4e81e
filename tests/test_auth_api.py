import asyncio
import unittest
from unittest.mock import AsyncMock, patch

from fastapi.testclient import TestClient

from account import dependencies
from account.config import AccountConfig
from account.dependencies import get_code_cache, get_mail_transport, get_user_store
from account.security import BcryptPasswordEncoder
from account.stores.memory_store import MemoryCodeCache, MemoryUserStore
from account.stores.redis_store import RedisCodeCache
from api.main import app
from tests.fakes import RecordingMailTransport

PREFIX = "/api/v1/auth"


class TestAuthApi(unittest.TestCase):
    def setUp(self):
        fixed_otp = patch("account.services.verification_service.AccountConfig.FIXED_OTP", None)
        fixed_otp.start()
        self.addCleanup(fixed_otp.stop)

        self.users = MemoryUserStore()
        self.codes = MemoryCodeCache(ttl_seconds=300)
        self.mail = RecordingMailTransport()
        asyncio.run(
            self.users.create_user(
                {
                    "email": "student@hanyang.ac.kr",
                    "hashed_password": BcryptPasswordEncoder().encode("correct-horse"),
                }
            )
        )

        app.dependency_overrides[get_user_store] = lambda: self.users
        app.dependency_overrides[get_code_cache] = lambda: self.codes
        app.dependency_overrides[get_mail_transport] = lambda: self.mail
        self.addCleanup(app.dependency_overrides.clear)

        self.client = TestClient(app)

    def _login(self, auto_login: bool = False) -> str:
        response = self.client.post(
            f"{PREFIX}/login",
            json={
                "email": "student@hanyang.ac.kr",
                "password": "correct-horse",
                "auto_login": auto_login,
            },
        )
        self.assertEqual(response.status_code, 200)
        return response.json()["data"]["access_token"]

    def test_signup_code_flow(self):
        with patch("account.services.verification_service.generate_code", return_value="483920"):
            response = self.client.post(f"{PREFIX}/email/code", json={"email": "a@x.com"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(self.mail.last.to, "a@x.com")
        self.assertNotIn("483920", response.text)

        ok = self.client.post(f"{PREFIX}/email/verify", json={"email": "a@x.com", "code": "483920"})
        self.assertEqual(ok.status_code, 200)
        self.assertTrue(ok.json()["success"])

        bad = self.client.post(f"{PREFIX}/email/verify", json={"email": "a@x.com", "code": "000000"})
        self.assertEqual(bad.status_code, 401)
        self.assertFalse(bad.json()["success"])

    def test_signup_code_mail_failure(self):
        self.mail.accept = False

        response = self.client.post(f"{PREFIX}/email/code", json={"email": "a@x.com"})

        self.assertEqual(response.status_code, 502)

    def test_invalid_email_rejected(self):
        response = self.client.post(f"{PREFIX}/email/code", json={"email": "not-an-email"})

        self.assertEqual(response.status_code, 422)

    def test_login_sets_cookies(self):
        self._login(auto_login=True)

        self.assertIn(AccountConfig.ACCESS_COOKIE_NAME, self.client.cookies)
        self.assertIn(AccountConfig.REFRESH_COOKIE_NAME, self.client.cookies)

    def test_login_bad_credentials(self):
        response = self.client.post(
            f"{PREFIX}/login",
            json={"email": "student@hanyang.ac.kr", "password": "wrong"},
        )

        self.assertEqual(response.status_code, 401)

    def test_reissue_from_refresh_cookie(self):
        self._login()

        response = self.client.post(f"{PREFIX}/reissue")

        self.assertEqual(response.status_code, 200)
        self.assertIn("access_token", response.json()["data"])

    def test_reissue_without_cookie(self):
        response = self.client.post(f"{PREFIX}/reissue")

        self.assertEqual(response.status_code, 401)

    def test_reissue_with_bad_token(self):
        self.client.cookies.set(AccountConfig.REFRESH_COOKIE_NAME, "garbage")

        response = self.client.post(f"{PREFIX}/reissue")

        self.assertEqual(response.status_code, 401)

    def test_password_endpoints_require_identity(self):
        response = self.client.post(f"{PREFIX}/password/check", json={"password": "x"})

        self.assertEqual(response.status_code, 401)

    def test_password_check_and_change(self):
        access_token = self._login()
        self.client.cookies.clear()
        headers = {"Authorization": f"Bearer {access_token}"}

        ok = self.client.post(
            f"{PREFIX}/password/check", json={"password": "correct-horse"}, headers=headers
        )
        self.assertEqual(ok.status_code, 200)

        wrong = self.client.post(f"{PREFIX}/password/check", json={"password": "nope"}, headers=headers)
        self.assertEqual(wrong.status_code, 401)

        changed = self.client.put(
            f"{PREFIX}/password", json={"new_password": "brand-new-pass"}, headers=headers
        )
        self.assertEqual(changed.status_code, 200)

        relogin = self.client.post(
            f"{PREFIX}/login",
            json={"email": "student@hanyang.ac.kr", "password": "brand-new-pass"},
        )
        self.assertEqual(relogin.status_code, 200)

    def test_find_password(self):
        self._login()

        response = self.client.post(f"{PREFIX}/password/find")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(self.mail.last.to, "student@hanyang.ac.kr")
        temporary = self.mail.last.html.rsplit(" ", 1)[-1]
        relogin = self.client.post(
            f"{PREFIX}/login",
            json={"email": "student@hanyang.ac.kr", "password": temporary},
        )
        self.assertEqual(relogin.status_code, 200)

    def test_change_password_over_72_bytes_is_rejected(self):
        access_token = self._login()
        headers = {"Authorization": f"Bearer {access_token}"}

        for too_long in ("a" * 100, "비밀번호" * 7):
            with self.subTest(length=len(too_long.encode("utf-8"))):
                response = self.client.put(
                    f"{PREFIX}/password", json={"new_password": too_long}, headers=headers
                )
                self.assertEqual(response.status_code, 422)

        ok = self.client.post(
            f"{PREFIX}/password/check", json={"password": "correct-horse"}, headers=headers
        )
        self.assertEqual(ok.status_code, 200)

    def test_login_over_72_bytes_is_rejected(self):
        response = self.client.post(
            f"{PREFIX}/login",
            json={"email": "student@hanyang.ac.kr", "password": "비밀번호" * 7},
        )

        self.assertEqual(response.status_code, 422)

    def test_change_password_at_72_bytes(self):
        access_token = self._login()
        headers = {"Authorization": f"Bearer {access_token}"}

        changed = self.client.put(
            f"{PREFIX}/password", json={"new_password": "b" * 72}, headers=headers
        )
        self.assertEqual(changed.status_code, 200)

        relogin = self.client.post(
            f"{PREFIX}/login",
            json={"email": "student@hanyang.ac.kr", "password": "b" * 72},
        )
        self.assertEqual(relogin.status_code, 200)


class TestCodeCacheShutdown(unittest.IsolatedAsyncioTestCase):
    async def test_close_without_redis_client_creates_nothing(self):
        with patch.object(dependencies, "_redis_code_cache", None), patch(
            "account.dependencies.RedisCodeCache"
        ) as redis_cache:
            await dependencies.close_code_cache()

            redis_cache.assert_not_called()
            self.assertIsNone(dependencies._redis_code_cache)

    async def test_close_existing_redis_client(self):
        client = AsyncMock()
        with patch.object(dependencies, "_redis_code_cache", RedisCodeCache(client=client, ttl_seconds=60)):
            await dependencies.close_code_cache()

            client.aclose.assert_awaited_once()
            self.assertIsNone(dependencies._redis_code_cache)


if __name__ == "__main__":
    unittest.main()
