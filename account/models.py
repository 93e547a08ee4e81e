"""Value objects passed between account services."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Identity:
    """Authenticated principal."""

    email: str
    user_id: int | None = None


@dataclass(frozen=True)
class TokenPair:
    access_token: str
    refresh_token: str
    auto_login: bool = False


@dataclass(frozen=True)
class RefreshCookie:
    """Attributes of the cookie carrying a refresh token.

    ``max_age`` is ``None`` for a browser-session cookie.
    """

    key: str
    value: str
    max_age: int | None
    http_only: bool
    secure: bool
    samesite: str
    domain: str | None = None
    path: str = "/"
