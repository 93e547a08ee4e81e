"""Account API routes."""

from __future__ import annotations

from datetime import timedelta

from fastapi import APIRouter, Cookie, Depends, HTTPException, Response, status

from account.config import AccountConfig
from account.constants import ResponseMessage
from account.dependencies import (
    get_current_identity,
    get_login_service,
    get_verification_service,
    set_cookie,
    set_refresh_cookie,
)
from account.exceptions import AccountException
from account.models import Identity, TokenPair
from account.schemas import (
    ApiResponse,
    CodeVerifyRequest,
    EmailRequest,
    LoginRequest,
    PasswordChangeRequest,
    PasswordRequest,
)
from account.services.login_service import LoginService
from account.services.verification_service import VerificationCodeService

router = APIRouter()


def _write_token_cookies(response: Response, tokens: TokenPair, login_service: LoginService) -> None:
    access_max_age = int(timedelta(minutes=AccountConfig.ACCESS_TOKEN_EXPIRE_MINUTES).total_seconds())
    set_cookie(response, AccountConfig.ACCESS_COOKIE_NAME, tokens.access_token, max_age=access_max_age)
    set_refresh_cookie(response, login_service.generate_refresh_cookie(tokens))


@router.post("/email/code", response_model=ApiResponse, status_code=status.HTTP_200_OK)
async def send_signup_code(
    payload: EmailRequest,
    code_service: VerificationCodeService = Depends(get_verification_service),
) -> ApiResponse:
    try:
        await code_service.issue_signup_code(payload.email)
    except AccountException as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.message) from exc

    return ApiResponse(success=True, message=ResponseMessage.CODE_SENT, data={})


@router.post("/email/verify", response_model=ApiResponse, status_code=status.HTTP_200_OK)
async def verify_signup_code(
    payload: CodeVerifyRequest,
    code_service: VerificationCodeService = Depends(get_verification_service),
) -> ApiResponse:
    try:
        await code_service.verify_code(payload.email, payload.code)
    except AccountException as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.message) from exc

    return ApiResponse(success=True, message=ResponseMessage.CODE_VERIFIED, data={})


@router.post("/login", response_model=ApiResponse, status_code=status.HTTP_200_OK)
async def login(
    payload: LoginRequest,
    response: Response,
    login_service: LoginService = Depends(get_login_service),
) -> ApiResponse:
    try:
        tokens = await login_service.login(payload.email, payload.password, payload.auto_login)
    except AccountException as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.message) from exc

    _write_token_cookies(response, tokens, login_service)
    return ApiResponse(
        success=True,
        message=ResponseMessage.LOGIN_SUCCESS,
        data={"access_token": tokens.access_token, "auto_login": tokens.auto_login},
    )


@router.post("/reissue", response_model=ApiResponse, status_code=status.HTTP_200_OK)
async def reissue(
    response: Response,
    refresh_token: str | None = Cookie(default=None, alias=AccountConfig.REFRESH_COOKIE_NAME),
    login_service: LoginService = Depends(get_login_service),
) -> ApiResponse:
    if not refresh_token:
        raise HTTPException(status_code=401, detail=ResponseMessage.TOKEN_MISSING)

    try:
        tokens = await login_service.reissue_token(refresh_token)
    except AccountException as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.message) from exc

    _write_token_cookies(response, tokens, login_service)
    return ApiResponse(
        success=True,
        message=ResponseMessage.TOKEN_REISSUED,
        data={"access_token": tokens.access_token, "auto_login": tokens.auto_login},
    )


@router.post("/password/check", response_model=ApiResponse, status_code=status.HTTP_200_OK)
async def password_check(
    payload: PasswordRequest,
    identity: Identity = Depends(get_current_identity),
    login_service: LoginService = Depends(get_login_service),
) -> ApiResponse:
    try:
        await login_service.password_check(identity, payload.password)
    except AccountException as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.message) from exc

    return ApiResponse(success=True, message=ResponseMessage.PASSWORD_MATCHED, data={})


@router.put("/password", response_model=ApiResponse, status_code=status.HTTP_200_OK)
async def change_password(
    payload: PasswordChangeRequest,
    identity: Identity = Depends(get_current_identity),
    login_service: LoginService = Depends(get_login_service),
) -> ApiResponse:
    try:
        await login_service.change_password(identity, payload.new_password)
    except AccountException as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.message) from exc

    return ApiResponse(success=True, message=ResponseMessage.PASSWORD_CHANGED, data={})


@router.post("/password/find", response_model=ApiResponse, status_code=status.HTTP_200_OK)
async def find_password(
    identity: Identity = Depends(get_current_identity),
    login_service: LoginService = Depends(get_login_service),
) -> ApiResponse:
    try:
        await login_service.find_password(identity)
    except AccountException as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.message) from exc

    return ApiResponse(success=True, message=ResponseMessage.TEMPORARY_PASSWORD_SENT, data={})
