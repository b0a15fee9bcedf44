"""Cookie-session login, logout and the require_admin dependency."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session

from storefront.api.v1.payloads import read_json_body
from storefront.core.config import settings
from storefront.core.database import get_db
from storefront.core.exceptions import RateLimitedError, clear_session_cookie
from storefront.core.security import create_session_token
from storefront.schemas.auth import LoginRequest, SessionUser
from storefront.schemas.common import ApiResponse, MessageResponse
from storefront.schemas.users import UserRead
from storefront.services import auth
from storefront.services.rate_limit import LoginRateLimiter, client_fingerprint, get_login_rate_limiter

router = APIRouter()


def _set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=settings.SESSION_MAX_AGE_SECONDS,
        path="/",
        httponly=True,
        secure=settings.APP_ENV == "prod",
        samesite="lax",
    )


def require_admin(
    request: Request,
    db: Annotated[Session, Depends(get_db)],
) -> UserRead:
    """
    Dependency: require a session cookie that resolves to an active admin.
    Raises 401 if missing or invalid, 403 if the user is not an active admin.
    """
    token = request.cookies.get(settings.SESSION_COOKIE_NAME)
    return auth.resolve_session(db, token)


@router.post("/login", response_model=ApiResponse[SessionUser])
async def login(
    request: Request,
    response: Response,
    db: Annotated[Session, Depends(get_db)],
    limiter: Annotated[LoginRateLimiter, Depends(get_login_rate_limiter)],
) -> ApiResponse[SessionUser]:
    """
    Authenticate with email and password and set the session cookie.
    Every attempt counts against the caller's fingerprint; a success resets it.
    """
    key = client_fingerprint(request)
    if not limiter.hit(key):
        raise RateLimitedError()

    body = await read_json_body(request, LoginRequest)
    user = await run_in_threadpool(auth.authenticate, db, body.email, body.password)
    limiter.reset(key)

    _set_session_cookie(response, create_session_token(user.id, user.email, user.role))
    return ApiResponse(data=user)


@router.post("/logout", response_model=MessageResponse)
def logout(response: Response) -> MessageResponse:
    clear_session_cookie(response)
    return MessageResponse(message="Logged out")


@router.get("/me", response_model=ApiResponse[UserRead])
def me(user: Annotated[UserRead, Depends(require_admin)]) -> ApiResponse[UserRead]:
    """Current admin user; 401/403 responses also clear a stale cookie."""
    return ApiResponse(data=user)
