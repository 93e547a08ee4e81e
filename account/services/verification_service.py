"""Email verification codes and temporary passwords."""

from __future__ import annotations

import logging
import secrets
import string

from account.config import AccountConfig
from account.constants import EmailTemplate
from account.exceptions import AuthenticationFailed, MailDeliveryError
from account.interfaces.code_cache import CodeCache
from account.interfaces.mail_transport import MailTransport
from account.services.mail_transport import default_sender

logger = logging.getLogger(__name__)

CODE_DIGITS = string.digits
CODE_LENGTH = 6
TEMPORARY_PASSWORD_CHARACTERS = string.ascii_uppercase + string.ascii_lowercase + string.digits
TEMPORARY_PASSWORD_LENGTH = 10

_random = secrets.SystemRandom()


def cache_key(email: str) -> str:
    return f"code:{email.lower()}"


def generate_code(length: int = CODE_LENGTH) -> str:
    return "".join(_random.choice(CODE_DIGITS) for _ in range(length))


def generate_temporary_password(length: int = TEMPORARY_PASSWORD_LENGTH) -> str:
    return "".join(_random.choice(TEMPORARY_PASSWORD_CHARACTERS) for _ in range(length))


class VerificationCodeService:
    """Issues one-time codes by email and checks them against the cache.

    A new code for an email replaces the previous one; expiry is left to the
    cache TTL.
    """

    def __init__(
        self,
        mail_transport: MailTransport,
        code_cache: CodeCache,
        sender: str | None = None,
    ) -> None:
        self._mail = mail_transport
        self._codes = code_cache
        self._sender = sender or default_sender()

    def _generate_signup_code(self) -> str:
        if AccountConfig.FIXED_OTP:
            return AccountConfig.FIXED_OTP
        return generate_code()

    async def issue_signup_code(self, email: str) -> str:
        code = self._generate_signup_code()
        content = EmailTemplate.SIGNUP_BODY.format(code=code)
        await self._store_and_send(email, code, EmailTemplate.SIGNUP_SUBJECT, content)
        logger.info(f"Signup code issued for {email}")
        return code

    async def issue_temporary_password(self, email: str) -> str:
        temporary_password = generate_temporary_password()
        content = EmailTemplate.TEMPORARY_PASSWORD_BODY.format(code=temporary_password)
        await self._store_and_send(
            email, temporary_password, EmailTemplate.TEMPORARY_PASSWORD_SUBJECT, content
        )
        logger.info(f"Temporary password issued for {email}")
        return temporary_password

    async def verify_code(self, email: str, code: str) -> None:
        stored = await self._codes.get(cache_key(email))
        if stored is None or not secrets.compare_digest(
            stored.encode("utf-8"), code.encode("utf-8")
        ):
            logger.info(f"Verification failed for {email}")
            raise AuthenticationFailed()

    async def _store_and_send(self, email: str, value: str, subject: str, html: str) -> None:
        """Cache the value, then mail it; the cache entry is dropped if delivery fails."""
        key = cache_key(email)
        await self._codes.set(key, value)
        if not await self._mail.send(self._sender, email, subject, html):
            await self._codes.delete(key)
            logger.warning(f"Mail delivery failed for {email}")
            raise MailDeliveryError()
