"""Domain layer DI providers."""

from dishka import Scope, provide

from chatauth.config import AuthSettings
from chatauth.domain.repository import HandoffStore, UserRepository
from chatauth.domain.service import (
    AuthService,
    IdentityNormalizer,
    OAuthClient,
    StateTokenService,
    TokenService,
    UserDirectory,
)
from chatauth.domain.value import AuthProvider
from chatauth.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Services over the user repository are REQUEST-scoped to align with the
    session lifecycle. Stateless services live for the whole app.
    """

    scope = Scope.REQUEST

    @provide
    def get_auth_service(
        self, oauth_clients: dict[AuthProvider, OAuthClient]
    ) -> AuthService:
        """Provide multi-provider authentication domain service.

        Args:
            oauth_clients: Dictionary mapping providers to their OAuth clients

        Returns:
            AuthService configured with all available OAuth clients
        """
        return AuthService(oauth_clients=oauth_clients)

    @provide(scope=Scope.APP)
    def get_identity_normalizer(self) -> IdentityNormalizer:
        """Provide identity normalizer."""
        return IdentityNormalizer()

    @provide(scope=Scope.APP)
    def get_token_service(self, auth_settings: AuthSettings) -> TokenService:
        """Provide access/refresh token service."""
        return TokenService(auth_settings=auth_settings)

    @provide(scope=Scope.APP)
    def get_state_token_service(
        self, handoff_store: HandoffStore, auth_settings: AuthSettings
    ) -> StateTokenService:
        """Provide one-time handoff service."""
        return StateTokenService(
            handoff_store=handoff_store, auth_settings=auth_settings
        )

    @provide
    def get_user_directory(self, user_repository: UserRepository) -> UserDirectory:
        """Provide user directory over the request's repository."""
        return UserDirectory(user_repository=user_repository)
