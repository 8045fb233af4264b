"""Domain services."""

from .auth_service import AuthService, OAuthClient
from .base import Clock, Service, utc_now
from .identity_normalizer import IdentityNormalizer, parse_provider
from .state_token_service import StateTokenService
from .token_service import TokenService
from .user_directory import UserDirectory

__all__ = [
    "AuthService",
    "Clock",
    "IdentityNormalizer",
    "OAuthClient",
    "Service",
    "StateTokenService",
    "TokenService",
    "UserDirectory",
    "parse_provider",
    "utc_now",
]
