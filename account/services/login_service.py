"""Login, token reissue and password management."""

from __future__ import annotations

import logging
from typing import Any

from account.exceptions import TokenExpired, UserNotFound, WrongPassword
from account.interfaces.authenticator import Authenticator
from account.interfaces.password_encoder import PasswordEncoder
from account.interfaces.token import TokenProvider, TokenResolver, TokenValidator
from account.interfaces.user_store import UserStore
from account.models import Identity, RefreshCookie, TokenPair
from account.services.verification_service import VerificationCodeService
from account.tokens import REFRESH

logger = logging.getLogger(__name__)


class LoginService:
    def __init__(
        self,
        authenticator: Authenticator,
        token_provider: TokenProvider,
        token_resolver: TokenResolver,
        token_validator: TokenValidator,
        user_store: UserStore,
        code_service: VerificationCodeService,
        password_encoder: PasswordEncoder,
    ) -> None:
        self._authenticator = authenticator
        self._provider = token_provider
        self._resolver = token_resolver
        self._validator = token_validator
        self._users = user_store
        self._codes = code_service
        self._encoder = password_encoder

    async def login(self, email: str, password: str, auto_login: bool = False) -> TokenPair:
        identity = await self._authenticator.authenticate(email, password)
        logger.info(f"Login succeeded for {identity.email} (auto_login={auto_login})")
        return self._provider.generate_login_token(identity, auto_login)

    async def reissue_token(self, refresh_token: str) -> TokenPair:
        """Mint a new token pair from a refresh token.

        The token is validated before any claim is read from it, so an
        expired or forged token never yields an identity.

        Raises:
            TokenExpired: If the refresh token fails validation
        """
        if not self._validator.validate_token(refresh_token, REFRESH):
            raise TokenExpired()
        identity = self._resolver.get_authentication(refresh_token)
        auto_login = self._resolver.get_auto_login(refresh_token)
        return self._provider.generate_login_token(identity, auto_login)

    def generate_refresh_cookie(self, token_pair: TokenPair) -> RefreshCookie:
        # Both tokens of a pair carry the same auto_login claim
        return self._provider.generate_refresh_cookie(
            token_pair.refresh_token,
            self._resolver.get_auto_login(token_pair.access_token),
        )

    async def password_check(self, identity: Identity, password: str) -> None:
        user = await self._find_user(identity)
        if self._encoder.matches(password, user.get("hashed_password") or ""):
            return
        raise WrongPassword()

    async def change_password(self, identity: Identity, new_password: str) -> None:
        user = await self._find_user(identity)
        await self._users.update_user(
            user["id"], {"hashed_password": self._encoder.encode(new_password)}
        )
        logger.info(f"Password changed for {identity.email}")

    async def find_password(self, identity: Identity) -> None:
        """Email a temporary password to the user and make it their password."""
        user = await self._find_user(identity)
        temporary_password = await self._codes.issue_temporary_password(user["email"])
        await self.change_password(identity, temporary_password)

    async def _find_user(self, identity: Identity) -> dict[str, Any]:
        user = await self._users.get_by_email(identity.email)
        if not user:
            raise UserNotFound()
        return user
