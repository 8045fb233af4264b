"""Bearer-token authentication for protected routes."""

from chatauth.domain.error import MissingBearerTokenError
from chatauth.domain.service import TokenService
from chatauth.domain.value import CallerContext

BEARER_PREFIX = "bearer "


def extract_bearer_token(authorization: str | None) -> str | None:
    """Return the token from an `Authorization: Bearer ...` header, if any."""
    if not authorization or not authorization.lower().startswith(BEARER_PREFIX):
        return None
    token = authorization[len(BEARER_PREFIX):].strip()
    return token or None


def authenticate_caller(
    token_service: TokenService, authorization: str | None
) -> CallerContext:
    """Build the caller context from a bearer header.

    Raises:
        MissingBearerTokenError: If there is no bearer token
        TokenInvalidError: If the token is invalid or not an access token
        TokenExpiredError: If the token has expired
    """
    token = extract_bearer_token(authorization)
    if token is None:
        raise MissingBearerTokenError()

    payload = token_service.verify_access_token(token)
    return CallerContext(
        user_id=payload.user_id,
        email=payload.email,
        username=payload.username,
        roles=payload.roles,
    )
