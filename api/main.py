"""
FastAPI application for the data portal account service.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from account.config import AccountConfig
from account.dependencies import close_code_cache
from account.exceptions import AccountException
from api.auth import router as auth_router
from db.engine import create_tables

logging.basicConfig(
    level=AccountConfig.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown."""
    logger.info(
        f"Starting account service (users={AccountConfig.USER_STORE}, "
        f"codes={AccountConfig.CODE_STORE}, mail={AccountConfig.EMAIL_PROVIDER})"
    )
    if AccountConfig.USER_STORE == "postgres":
        create_tables()
    yield
    await close_code_cache()
    logger.info("Account service stopped")


def create_error_response(status_code: int, message: str, data: dict | None = None) -> JSONResponse:
    """Create a standardized error response."""
    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "message": message,
            "data": data,
        },
    )


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    return create_error_response(exc.status_code, str(exc.detail))


async def account_exception_handler(request: Request, exc: AccountException) -> JSONResponse:
    logger.warning(f"Account error on {request.url.path}: {exc.message}")
    return create_error_response(exc.status_code, str(exc.message))


app = FastAPI(
    title="ERICA Data Portal Account API",
    description="Email verification, login and password management",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(AccountConfig.CORS_ORIGINS),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(HTTPException, http_exception_handler)
app.add_exception_handler(AccountException, account_exception_handler)

app.include_router(auth_router, prefix="/api/v1/auth", tags=["auth"])
