"""Infrastructure layer errors."""

from chatauth.domain.error import ExternalProviderError


class ProviderAuthError(ExternalProviderError):
    """OAuth exchange with an identity provider failed.

    Covers unknown state, failed code exchange, rejected ID tokens and
    failed user-info requests.
    """

    def __init__(self, provider: str, message: str):
        self.provider = provider
        super().__init__(f"{provider} authentication failed: {message}")
