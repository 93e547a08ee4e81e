"""Token component interfaces."""

from __future__ import annotations

from typing import Protocol

from account.models import Identity, RefreshCookie, TokenPair


class TokenProvider(Protocol):
    def generate_login_token(self, identity: Identity, auto_login: bool) -> TokenPair:
        ...

    def generate_refresh_cookie(self, refresh_token: str, auto_login: bool) -> RefreshCookie:
        ...


class TokenResolver(Protocol):
    def get_authentication(self, token: str) -> Identity:
        ...

    def get_auto_login(self, token: str) -> bool:
        ...


class TokenValidator(Protocol):
    def validate_token(self, token: str, token_type: str | None = None) -> bool:
        ...
