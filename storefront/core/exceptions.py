"""
Application error taxonomy and the handlers that turn it into HTTP responses.

Data-access and service code raise these; the handlers registered in
storefront.main are the only place an error becomes a status code. Every error
body uses the API envelope: {"success": false, "error": ..., "details": ...}.
"""

import logging
from typing import Any

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException

from storefront.core.config import settings

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base class for all application exceptions."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"

    def __init__(
        self,
        message: str | None = None,
        details: Any = None,
        headers: dict[str, str] | None = None,
    ):
        self.message = message or self.default_message
        self.details = details
        self.headers = headers
        super().__init__(self.message)


class DataValidationError(AppError):
    """Request body or path failed validation; details carries per-field errors."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid data"

    @classmethod
    def from_pydantic(cls, exc: ValidationError, message: str | None = None) -> "DataValidationError":
        return cls(message, details=field_errors(exc.errors()))


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class ConflictError(AppError):
    """Unique constraint violation (duplicate email and the like)."""

    status_code = status.HTTP_409_CONFLICT
    default_message = "Conflict"


class AuthenticationError(AppError):
    """Caller is not (or no longer) authenticated. Optionally clears the session cookie."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Not authenticated"

    def __init__(self, message: str | None = None, details: Any = None, clear_session: bool = False):
        super().__init__(message, details)
        self.clear_session = clear_session


class InvalidCredentialsError(AuthenticationError):
    default_message = "Invalid credentials"


class PermissionDeniedError(AppError):
    """Caller is authenticated but may not use the admin surface."""

    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Forbidden"

    def __init__(self, message: str | None = None, details: Any = None, clear_session: bool = False):
        super().__init__(message, details)
        self.clear_session = clear_session


class PayloadTooLargeError(AppError):
    status_code = status.HTTP_413_REQUEST_ENTITY_TOO_LARGE
    default_message = "Payload too large"


class RateLimitedError(AppError):
    status_code = status.HTTP_429_TOO_MANY_REQUESTS
    default_message = "Too many attempts. Please try again later."


class UpstreamError(AppError):
    """Database or infrastructure failure. The message shown to clients is generic."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"


class UploadTimeoutError(AppError):
    status_code = status.HTTP_504_GATEWAY_TIMEOUT
    default_message = "Upload took too long"


def field_errors(errors: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Reduce pydantic error dicts to JSON-safe {field, message, type} entries."""
    out: list[dict[str, Any]] = []
    for err in errors:
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        out.append(
            {
                "field": ".".join(loc),
                "message": str(err.get("msg", "")),
                "type": str(err.get("type", "")),
            }
        )
    return out


def error_response(
    status_code: int,
    message: str,
    details: Any = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    content: dict[str, Any] = {"success": False, "error": message}
    if details is not None:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content, headers=headers)


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(
        key=settings.SESSION_COOKIE_NAME,
        path="/",
        secure=settings.APP_ENV == "prod",
        httponly=True,
        samesite="lax",
    )


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Handle AppError subclasses; UpstreamError text is never sent to clients."""
    if isinstance(exc, UpstreamError):
        logger.error("Upstream failure on %s %s: %s", request.method, request.url.path, exc.message)
        response = error_response(exc.status_code, UpstreamError.default_message)
    else:
        response = error_response(exc.status_code, exc.message, exc.details, exc.headers)
    if getattr(exc, "clear_session", False):
        clear_session_cookie(response)
    return response


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """FastAPI's own validation errors (query, path, typed bodies) use the 400 envelope."""
    return error_response(
        status.HTTP_400_BAD_REQUEST,
        DataValidationError.default_message,
        field_errors(list(exc.errors())),
    )


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    return error_response(exc.status_code, message, headers=getattr(exc, "headers", None))


async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception("Database error on %s %s", request.method, request.url.path)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, UpstreamError.default_message)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, UpstreamError.default_message)


def register_exception_handlers(app) -> None:
    """Attach every handler above to the FastAPI app."""
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
