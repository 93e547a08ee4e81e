"""Authenticator interface."""

from __future__ import annotations

from typing import Protocol

from account.models import Identity


class Authenticator(Protocol):
    async def authenticate(self, email: str, password: str) -> Identity:
        ...
