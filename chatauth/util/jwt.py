"""JWT token utilities."""

from datetime import datetime, timedelta, timezone
from typing import Any, Literal

import jwt
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from chatauth.config import AuthSettings

TokenType = Literal["access", "refresh"]


class TokenPayload(BaseModel):
    """JWT token payload."""

    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(alias="userId")
    email: str = Field(alias="sub")
    username: str | None = None
    roles: list[str] = []
    token_type: TokenType = Field(alias="type")
    iat: datetime
    exp: datetime


class JWTError(Exception):
    """JWT-related error."""

    pass


class JWTExpiredError(JWTError):
    """Token is past its expiry instant."""

    pass


def create_token(
    claims: dict[str, Any],
    subject: str,
    token_type: TokenType,
    expires_in: timedelta,
    settings: AuthSettings,
    now: datetime | None = None,
) -> str:
    """Create a signed JWT.

    Args:
        claims: Custom claims (userId, username, roles, ...)
        subject: Token subject (the account email)
        token_type: "access" or "refresh"
        expires_in: Lifetime added to the issue time
        settings: Authentication settings
        now: Issue time (defaults to current UTC time)

    Returns:
        Encoded JWT token
    """
    issued_at = now or datetime.now(timezone.utc)

    payload = {
        **claims,
        "type": token_type,
        "sub": subject,
        "iat": issued_at,
        "exp": issued_at + expires_in,
    }

    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(
    token: str, settings: AuthSettings, now: datetime | None = None
) -> TokenPayload:
    """Verify and decode a JWT token.

    Expiry is exclusive: a token is expired as soon as `now` is not
    strictly before its `exp` claim.

    Args:
        token: JWT token to verify
        settings: Authentication settings
        now: Reference time (defaults to current UTC time)

    Returns:
        Token payload if valid

    Raises:
        JWTExpiredError: If the token has expired
        JWTError: If the token is malformed or its signature is invalid
    """
    try:
        claims = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={
                "verify_exp": False,
                "require": ["exp", "iat", "sub", "type", "userId"],
            },
        )
    except jwt.InvalidTokenError as e:
        raise JWTError(f"Invalid token: {e}")

    current = now or datetime.now(timezone.utc)
    try:
        expiry = int(claims["exp"])
    except (TypeError, ValueError):
        raise JWTError("Invalid token: malformed exp claim")
    if current.timestamp() >= expiry:
        raise JWTExpiredError("Token has expired")

    try:
        return TokenPayload.model_validate(claims)
    except ValidationError as e:
        raise JWTError(f"Invalid token claims: {e.error_count()} errors")
