"""Application layer DI providers."""

from dishka import Scope, provide

from chatauth.application.usecase.auth import (
    ExchangeStateUseCase,
    GetCurrentUserUseCase,
    LoginUseCase,
    LogoutUseCase,
    RefreshTokenUseCase,
)
from chatauth.application.usecase.user import GetUserProfileUseCase
from chatauth.config import Settings
from chatauth.domain.service import (
    AuthService,
    IdentityNormalizer,
    StateTokenService,
    TokenService,
    UserDirectory,
)
from chatauth.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    scope = Scope.REQUEST

    # Auth use cases
    @provide
    def get_login_use_case(
        self,
        auth_service: AuthService,
        identity_normalizer: IdentityNormalizer,
        user_directory: UserDirectory,
        token_service: TokenService,
        state_token_service: StateTokenService,
        settings: Settings,
    ) -> LoginUseCase:
        """Provide login use case."""
        return LoginUseCase(
            auth_service=auth_service,
            identity_normalizer=identity_normalizer,
            user_directory=user_directory,
            token_service=token_service,
            state_token_service=state_token_service,
            settings=settings,
        )

    @provide
    def get_exchange_state_use_case(
        self, state_token_service: StateTokenService
    ) -> ExchangeStateUseCase:
        """Provide state token exchange use case."""
        return ExchangeStateUseCase(state_token_service=state_token_service)

    @provide
    def get_refresh_token_use_case(
        self, token_service: TokenService
    ) -> RefreshTokenUseCase:
        """Provide refresh token use case."""
        return RefreshTokenUseCase(token_service=token_service)

    @provide
    def get_current_user_use_case(
        self, user_directory: UserDirectory
    ) -> GetCurrentUserUseCase:
        """Provide get current user use case."""
        return GetCurrentUserUseCase(user_directory=user_directory)

    @provide
    def get_logout_use_case(self, user_directory: UserDirectory) -> LogoutUseCase:
        """Provide logout use case."""
        return LogoutUseCase(user_directory=user_directory)

    # User use cases
    @provide
    def get_get_user_profile_use_case(
        self, user_directory: UserDirectory
    ) -> GetUserProfileUseCase:
        """Provide get user profile use case."""
        return GetUserProfileUseCase(user_directory=user_directory)
