"""Interface layer errors and the HTTP error body."""

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ErrorCode(Enum):
    """Error catalog: code, client-facing message, HTTP status."""

    AUTH_TOKEN_INVALID = ("AUTH_001", "Invalid or expired token", 401)
    AUTH_TOKEN_MISSING = ("AUTH_002", "Authorization token is required", 401)
    AUTH_TOKEN_EXPIRED = ("AUTH_003", "Token has expired", 401)
    AUTH_UNAUTHORIZED = ("AUTH_004", "Unauthorized access", 401)
    AUTH_FORBIDDEN = ("AUTH_005", "Access denied", 403)

    OAUTH_STATE_TOKEN_INVALID = ("OAUTH_001", "Invalid or expired state token", 401)
    OAUTH_STATE_TOKEN_MISSING = ("OAUTH_002", "State token is required", 400)
    OAUTH_EMAIL_NOT_FOUND = ("OAUTH_003", "Email not found from OAuth2 provider", 400)
    OAUTH_PROVIDER_NOT_SUPPORTED = ("OAUTH_004", "OAuth2 provider not supported", 400)

    USER_NOT_FOUND = ("USER_001", "User not found", 404)
    USER_ALREADY_EXISTS = ("USER_002", "User already exists", 409)

    VALIDATION_FAILED = ("VALIDATION_001", "Validation failed", 400)

    SERVER_INTERNAL_ERROR = ("SERVER_001", "Internal server error", 500)

    def __init__(self, code: str, message: str, status: int) -> None:
        self.code = code
        self.message = message
        self.status = status


def _now() -> datetime:
    return datetime.now(timezone.utc)


class ErrorResponse(BaseModel):
    """JSON body of every error response."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    error_code: str
    status: int
    error_message: str
    timestamp: datetime = Field(default_factory=_now)
    path: str | None = None
    validation_errors: dict[str, list[str]] | None = None

    @classmethod
    def of(
        cls,
        error: ErrorCode,
        path: str | None = None,
        validation_errors: dict[str, list[str]] | None = None,
    ) -> "ErrorResponse":
        return cls(
            error_code=error.code,
            status=error.status,
            error_message=error.message,
            path=path,
            validation_errors=validation_errors,
        )
