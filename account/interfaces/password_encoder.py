"""Password encoder interface."""

from __future__ import annotations

from typing import Protocol


class PasswordEncoder(Protocol):
    def encode(self, raw_password: str) -> str:
        ...

    def matches(self, raw_password: str, hashed_password: str) -> bool:
        ...
