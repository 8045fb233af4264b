"""Exception handlers mapping domain errors to HTTP responses.

Responses carry catalog messages only; exception text goes to the logs.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from chatauth.domain.error import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    DomainError,
    ExternalProviderError,
    MissingBearerTokenError,
    MissingEmailError,
    NotFoundError,
    StateTokenInvalidError,
    StateTokenMissingError,
    TokenExpiredError,
    UnsupportedProviderError,
    ValidationError,
)
from chatauth.interface.error import ErrorCode, ErrorResponse

logger = logging.getLogger(__name__)


def error_code_for(exc: Exception) -> ErrorCode:
    """Pick the catalog entry for an exception."""
    match exc:
        case StateTokenInvalidError():
            return ErrorCode.OAUTH_STATE_TOKEN_INVALID
        case StateTokenMissingError():
            return ErrorCode.OAUTH_STATE_TOKEN_MISSING
        case MissingBearerTokenError():
            return ErrorCode.AUTH_TOKEN_MISSING
        case TokenExpiredError():
            return ErrorCode.AUTH_TOKEN_EXPIRED
        case AuthenticationError():
            return ErrorCode.AUTH_TOKEN_INVALID
        case AuthorizationError():
            return ErrorCode.AUTH_FORBIDDEN
        case UnsupportedProviderError():
            return ErrorCode.OAUTH_PROVIDER_NOT_SUPPORTED
        case MissingEmailError():
            return ErrorCode.OAUTH_EMAIL_NOT_FOUND
        case ExternalProviderError():
            return ErrorCode.AUTH_UNAUTHORIZED
        case ValidationError():
            return ErrorCode.VALIDATION_FAILED
        case NotFoundError():
            return ErrorCode.USER_NOT_FOUND
        case ConflictError():
            return ErrorCode.USER_ALREADY_EXISTS
        case _:
            return ErrorCode.SERVER_INTERNAL_ERROR


def _respond(error: ErrorResponse) -> JSONResponse:
    return JSONResponse(
        status_code=error.status,
        content=error.model_dump(mode="json", by_alias=True),
    )


async def domain_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle DomainError and its subclasses."""
    code = error_code_for(exc)
    if code.status >= 500:
        logger.error(f"Unhandled domain error on {request.url.path}: {exc}")
    else:
        logger.info(
            f"{type(exc).__name__} on {request.url.path}: {exc} -> {code.code}"
        )
    return _respond(ErrorResponse.of(code, path=request.url.path))


async def request_validation_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle FastAPI request validation failures with a field -> messages map."""
    field_errors: dict[str, list[str]] = {}
    if isinstance(exc, RequestValidationError):
        for error in exc.errors():
            location = [str(part) for part in error.get("loc", ()) if part != "body"]
            field = ".".join(location) or "request"
            field_errors.setdefault(field, []).append(error.get("msg", "invalid"))

    logger.info(f"Validation failed on {request.url.path}: {list(field_errors)}")
    return _respond(
        ErrorResponse.of(
            ErrorCode.VALIDATION_FAILED,
            path=request.url.path,
            validation_errors=field_errors,
        )
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle anything else as a generic internal error."""
    logger.exception(f"Unexpected error on {request.url.path}: {exc}")
    return _respond(
        ErrorResponse.of(ErrorCode.SERVER_INTERNAL_ERROR, path=request.url.path)
    )


def register_error_handlers(app: FastAPI) -> None:
    """Register exception handlers on the app."""
    app.add_exception_handler(DomainError, domain_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
