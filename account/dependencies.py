"""Account dependency helpers and service wiring."""

from __future__ import annotations

from fastapi import Cookie, Depends, Header, HTTPException, Response

from account.config import AccountConfig
from account.exceptions import AccountException
from account.interfaces.code_cache import CodeCache
from account.interfaces.mail_transport import MailTransport
from account.interfaces.user_store import UserStore
from account.models import Identity, RefreshCookie
from account.security import BcryptPasswordEncoder
from account.services.authenticator import PasswordAuthenticator
from account.services.login_service import LoginService
from account.services.mail_transport import ConsoleMailTransport, ResendMailTransport
from account.services.verification_service import VerificationCodeService
from account.stores.memory_store import MemoryCodeCache, MemoryUserStore
from account.stores.postgres_store import PostgresUserStore
from account.stores.redis_store import RedisCodeCache
from account.tokens import ACCESS, JwtTokenProvider, JwtTokenResolver, JwtTokenValidator


_memory_user_store = MemoryUserStore()
_memory_code_cache = MemoryCodeCache()

_postgres_user_store: PostgresUserStore | None = None
_redis_code_cache: RedisCodeCache | None = None

_password_encoder = BcryptPasswordEncoder()
_token_provider = JwtTokenProvider()
_token_resolver = JwtTokenResolver()
_token_validator = JwtTokenValidator()


def get_user_store() -> UserStore:
    """Get the user store based on USER_STORE config."""
    global _postgres_user_store
    if AccountConfig.USER_STORE == "postgres":
        if _postgres_user_store is None:
            _postgres_user_store = PostgresUserStore()
        return _postgres_user_store
    return _memory_user_store


def get_code_cache() -> CodeCache:
    """Get the code cache based on CODE_STORE config."""
    global _redis_code_cache
    if AccountConfig.CODE_STORE == "redis":
        if _redis_code_cache is None:
            _redis_code_cache = RedisCodeCache()
        return _redis_code_cache
    return _memory_code_cache


async def close_code_cache() -> None:
    """Close the Redis client if one was created."""
    global _redis_code_cache
    if _redis_code_cache is not None:
        await _redis_code_cache.close()
        _redis_code_cache = None


def get_mail_transport() -> MailTransport:
    provider = AccountConfig.EMAIL_PROVIDER.lower()
    if provider == "resend":
        return ResendMailTransport()
    if provider == "console":
        return ConsoleMailTransport()
    raise ValueError(f"Unknown email provider: {provider}. Use 'resend' or 'console'.")


def get_verification_service(
    mail_transport: MailTransport = Depends(get_mail_transport),
    code_cache: CodeCache = Depends(get_code_cache),
) -> VerificationCodeService:
    return VerificationCodeService(mail_transport=mail_transport, code_cache=code_cache)


def get_login_service(
    user_store: UserStore = Depends(get_user_store),
    code_service: VerificationCodeService = Depends(get_verification_service),
) -> LoginService:
    return LoginService(
        authenticator=PasswordAuthenticator(user_store, _password_encoder),
        token_provider=_token_provider,
        token_resolver=_token_resolver,
        token_validator=_token_validator,
        user_store=user_store,
        code_service=code_service,
        password_encoder=_password_encoder,
    )


async def get_current_identity(
    access_token: str | None = Cookie(default=None, alias=AccountConfig.ACCESS_COOKIE_NAME),
    authorization: str | None = Header(default=None),
) -> Identity:
    token = access_token
    if authorization and authorization.lower().startswith("bearer "):
        token = authorization[7:].strip()
    if not token:
        raise HTTPException(status_code=401, detail="Not authenticated")
    if not _token_validator.validate_token(token, ACCESS):
        raise HTTPException(status_code=401, detail="Invalid or expired access token")
    try:
        return _token_resolver.get_authentication(token)
    except AccountException as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.message) from exc


def set_cookie(
    response: Response,
    key: str,
    value: str,
    max_age: int | None = None,
    http_only: bool | None = None,
) -> None:
    response.set_cookie(
        key=key,
        value=value,
        max_age=max_age,
        httponly=AccountConfig.COOKIE_HTTP_ONLY if http_only is None else http_only,
        secure=AccountConfig.COOKIE_SECURE,
        samesite=AccountConfig.COOKIE_SAMESITE,
        domain=AccountConfig.COOKIE_DOMAIN,
    )


def set_refresh_cookie(response: Response, cookie: RefreshCookie) -> None:
    response.set_cookie(
        key=cookie.key,
        value=cookie.value,
        max_age=cookie.max_age,
        path=cookie.path,
        httponly=cookie.http_only,
        secure=cookie.secure,
        samesite=cookie.samesite,
        domain=cookie.domain,
    )
