"""Email/password authenticator backed by the user store."""

from __future__ import annotations

import logging

from account.constants import ResponseMessage
from account.exceptions import AuthenticationFailed
from account.interfaces.password_encoder import PasswordEncoder
from account.interfaces.user_store import UserStore
from account.models import Identity

logger = logging.getLogger(__name__)


class PasswordAuthenticator:
    def __init__(self, user_store: UserStore, password_encoder: PasswordEncoder) -> None:
        self._users = user_store
        self._encoder = password_encoder

    async def authenticate(self, email: str, password: str) -> Identity:
        user = await self._users.get_by_email(email)
        if not user:
            logger.info(f"Login rejected for unknown email {email}")
            raise AuthenticationFailed(ResponseMessage.BAD_CREDENTIALS)

        hashed = user.get("hashed_password")
        if not hashed or not self._encoder.matches(password, hashed):
            logger.info(f"Login rejected for {email}: bad password")
            raise AuthenticationFailed(ResponseMessage.BAD_CREDENTIALS)

        return Identity(email=user["email"], user_id=user.get("id"))
