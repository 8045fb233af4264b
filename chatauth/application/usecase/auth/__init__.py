"""Authentication use cases."""

from .exchange_state import ExchangeStateUseCase
from .get_current_user import GetCurrentUserUseCase
from .login import LoginUseCase
from .logout import LogoutUseCase
from .refresh_token import RefreshTokenUseCase

__all__ = [
    "ExchangeStateUseCase",
    "GetCurrentUserUseCase",
    "LoginUseCase",
    "LogoutUseCase",
    "RefreshTokenUseCase",
]
