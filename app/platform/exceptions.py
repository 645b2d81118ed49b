from typing import Any, Optional

from fastapi import HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.platform.logger import get_logger
from app.platform.response import api_response

logger = get_logger(__name__)


class AppException(HTTPException):
    """HTTPException with a fixed status code and default message."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail: str = "Internal server error"
    headers: Optional[dict] = None

    def __init__(self, detail: Optional[str] = None, data: Any = None):
        super().__init__(
            status_code=self.status_code,
            detail=detail or self.default_detail,
            headers=type(self).headers,
        )
        self.data = data


class InvalidCredentials(AppException):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Invalid email or password"


class AccountLocked(AppException):
    status_code = status.HTTP_423_LOCKED
    default_detail = (
        "Account is locked due to too many failed login attempts. Please try again later."
    )


class AccountDeactivated(AppException):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Account is deactivated. Please contact administrator."


class TokenInvalidOrExpired(AppException):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Invalid or expired token. Please login again."
    headers = {"WWW-Authenticate": "Bearer"}


class ValidationFailed(AppException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Validation failed"


class DuplicateAccount(AppException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Admin with this email already exists"


class NotFound(AppException):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Resource not found"


class PermissionDenied(AppException):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Access denied"


class PasswordHashError(Exception):
    """Stored password hash is missing or malformed."""


class EmailDeliveryError(Exception):
    """Neither the relay nor SMTP accepted the message."""


def _field_errors(exc: RequestValidationError) -> list:
    errors = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        errors.append({"field": ".".join(loc) or None, "message": error.get("msg")})
    return errors


def add_exception_handlers(app):
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return api_response(
            message=str(exc.detail) or "Error",
            status_code=exc.status_code,
            data=getattr(exc, "data", None),
            headers=exc.headers,
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return api_response(
            message="Validation failed",
            status_code=status.HTTP_400_BAD_REQUEST,
            data={"errors": _field_errors(exc)},
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled exception on {request.method} {request.url.path}: {exc}")
        return api_response(
            message="Internal server error",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
