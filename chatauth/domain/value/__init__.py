"""Domain value objects for chat identity."""

from chatauth.domain.value.identifiers import ExternalId, HandoffToken, InternalId
from chatauth.domain.value.principal import (
    AuthenticatedPrincipal,
    OAuth2Principal,
    OidcPrincipal,
)
from chatauth.domain.value.types import (
    AuthProvider,
    CallerContext,
    HandoffPayload,
    NormalizedIdentity,
    OnlineStatus,
    Role,
    TokenPair,
    Username,
)

__all__ = [
    # Identifiers
    "InternalId",
    "ExternalId",
    "HandoffToken",
    # Types
    "AuthProvider",
    "OnlineStatus",
    "Role",
    "Username",
    "NormalizedIdentity",
    "TokenPair",
    "HandoffPayload",
    "CallerContext",
    # Principals
    "AuthenticatedPrincipal",
    "OidcPrincipal",
    "OAuth2Principal",
]
