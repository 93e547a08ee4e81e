"""Account request/response schemas."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, EmailStr, Field, field_validator

from account.constants import ResponseMessage
from account.security import password_fits_bcrypt


def _check_password_bytes(value: str) -> str:
    if not password_fits_bcrypt(value):
        raise ValueError(ResponseMessage.PASSWORD_TOO_LONG)
    return value


class ApiResponse(BaseModel):
    success: bool
    message: str
    data: dict[str, Any] | None = None


class EmailRequest(BaseModel):
    email: EmailStr


class CodeVerifyRequest(BaseModel):
    email: EmailStr
    code: str = Field(min_length=1, max_length=32)


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1, max_length=128)
    auto_login: bool = False

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        return _check_password_bytes(v)


class PasswordRequest(BaseModel):
    password: str = Field(min_length=1, max_length=128)

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        return _check_password_bytes(v)


class PasswordChangeRequest(BaseModel):
    new_password: str = Field(min_length=8, max_length=128)

    @field_validator("new_password")
    @classmethod
    def validate_new_password(cls, v: str) -> str:
        return _check_password_bytes(v)
