"""JWT issuing, resolving and validation."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Any
from uuid import uuid4

from jose import JWTError, jwt

from account.config import AccountConfig
from account.exceptions import InvalidToken
from account.models import Identity, RefreshCookie, TokenPair

logger = logging.getLogger(__name__)

ACCESS = "access"
REFRESH = "refresh"


def refresh_token_lifetime(auto_login: bool) -> timedelta:
    if auto_login:
        return timedelta(days=AccountConfig.AUTO_LOGIN_REFRESH_TOKEN_EXPIRE_DAYS)
    return timedelta(days=AccountConfig.REFRESH_TOKEN_EXPIRE_DAYS)


def create_token(
    identity: Identity,
    token_type: str,
    auto_login: bool,
    expires_in: timedelta,
) -> str:
    now = datetime.now(timezone.utc)
    payload: dict[str, Any] = {
        "sub": identity.email,
        "type": token_type,
        "auto_login": auto_login,
        "exp": now + expires_in,
        "iat": now,
        "jti": uuid4().hex,
    }
    if identity.user_id is not None:
        payload["user_id"] = identity.user_id
    return jwt.encode(payload, AccountConfig.JWT_SECRET, algorithm=AccountConfig.JWT_ALGORITHM)


def decode_token(token: str) -> dict[str, Any]:
    try:
        return jwt.decode(token, AccountConfig.JWT_SECRET, algorithms=[AccountConfig.JWT_ALGORITHM])
    except JWTError as exc:
        raise InvalidToken() from exc


class JwtTokenProvider:
    def generate_login_token(self, identity: Identity, auto_login: bool) -> TokenPair:
        access_token = create_token(
            identity,
            ACCESS,
            auto_login,
            timedelta(minutes=AccountConfig.ACCESS_TOKEN_EXPIRE_MINUTES),
        )
        refresh_token = create_token(
            identity, REFRESH, auto_login, refresh_token_lifetime(auto_login)
        )
        return TokenPair(
            access_token=access_token,
            refresh_token=refresh_token,
            auto_login=auto_login,
        )

    def generate_refresh_cookie(self, refresh_token: str, auto_login: bool) -> RefreshCookie:
        """Persistent cookie for auto-login sessions, browser-session cookie otherwise."""
        max_age = None
        if auto_login:
            max_age = int(refresh_token_lifetime(True).total_seconds())
        return RefreshCookie(
            key=AccountConfig.REFRESH_COOKIE_NAME,
            value=refresh_token,
            max_age=max_age,
            http_only=AccountConfig.COOKIE_HTTP_ONLY,
            secure=AccountConfig.COOKIE_SECURE,
            samesite=AccountConfig.COOKIE_SAMESITE,
            domain=AccountConfig.COOKIE_DOMAIN,
        )


class JwtTokenResolver:
    def get_authentication(self, token: str) -> Identity:
        payload = decode_token(token)
        email = payload.get("sub")
        if not email:
            raise InvalidToken()
        user_id = payload.get("user_id")
        return Identity(email=email, user_id=int(user_id) if user_id is not None else None)

    def get_auto_login(self, token: str) -> bool:
        return bool(decode_token(token).get("auto_login", False))


class JwtTokenValidator:
    def validate_token(self, token: str, token_type: str | None = None) -> bool:
        """True when the signature and expiry check out (and the type, if given)."""
        try:
            payload = jwt.decode(
                token, AccountConfig.JWT_SECRET, algorithms=[AccountConfig.JWT_ALGORITHM]
            )
        except JWTError as exc:
            logger.info(f"Token rejected: {exc}")
            return False
        if token_type is not None and payload.get("type") != token_type:
            logger.info(f"Token rejected: expected {token_type}, got {payload.get('type')}")
            return False
        return True
