"""Google OpenID Connect adapter."""

from .client import GoogleOAuthClient, MockGoogleOAuthClient, RealGoogleOAuthClient

__all__ = ["GoogleOAuthClient", "RealGoogleOAuthClient", "MockGoogleOAuthClient"]
