"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class ConflictError(DomainError):
    """Raised when a write conflicts with existing state."""

    pass


class DuplicateAccountError(ConflictError):
    """Raised when an account violates a uniqueness constraint.

    Unique keys: email, username, external id, (provider, provider user id).
    """

    def __init__(self, field: str, value: str):
        self.field = field
        self.value = value
        super().__init__(f"Account with {field} already exists: {value}")


class ConcurrentModificationError(ConflictError):
    """Raised when an optimistic-lock version check fails."""

    def __init__(self, resource: str, identifier: str, expected_version: int):
        self.resource = resource
        self.identifier = identifier
        self.expected_version = expected_version
        super().__init__(
            f"{resource} {identifier} was modified concurrently "
            f"(expected version {expected_version})"
        )


class AuthenticationError(DomainError):
    """Missing, invalid or expired credentials."""

    pass


class MissingBearerTokenError(AuthenticationError):
    """Raised when a protected operation is called without a bearer token."""

    def __init__(self) -> None:
        super().__init__("Authorization token is required")


class TokenInvalidError(AuthenticationError):
    """Raised for malformed tokens, bad signatures or wrong token types."""

    pass


class TokenExpiredError(AuthenticationError):
    """Raised when a token is past its expiry instant."""

    pass


class StateTokenInvalidError(AuthenticationError):
    """Raised when a handoff token has no live entry.

    Deliberately does not say whether the token never existed, expired
    or was already consumed.
    """

    def __init__(self) -> None:
        super().__init__("Invalid or expired state token")


class AuthorizationError(DomainError):
    """Raised when the caller lacks the required role."""

    pass


class StateTokenMissingError(ValidationError):
    """Raised when an exchange request carries no handoff token."""

    def __init__(self) -> None:
        super().__init__("State token is required")


class ExternalProviderError(DomainError):
    """Identity provider returned something we cannot use."""

    pass


class UnsupportedProviderError(ExternalProviderError):
    """Raised when a provider name matches no supported provider."""

    def __init__(self, provider: str):
        self.provider = provider
        super().__init__(f"Unsupported OAuth2 provider: {provider}")


class MissingEmailError(ExternalProviderError):
    """Raised when no email can be extracted from provider attributes."""

    def __init__(self, provider: str):
        self.provider = provider
        super().__init__(f"Email not found from OAuth2 provider: {provider}")


class MissingProviderUserIdError(ExternalProviderError):
    """Raised when provider attributes carry no subject/id for the user."""

    def __init__(self, provider: str):
        self.provider = provider
        super().__init__(f"User id not found from OAuth2 provider: {provider}")
