"""Identity normalizer domain service.

Turns provider-specific user-info payloads into a `NormalizedIdentity`.
"""

from typing import Any

import logfire

from chatauth.domain.error import (
    MissingEmailError,
    MissingProviderUserIdError,
    UnsupportedProviderError,
)
from chatauth.domain.value import (
    AuthenticatedPrincipal,
    AuthProvider,
    NormalizedIdentity,
    OAuth2Principal,
    OidcPrincipal,
)

from .base import Service

SUPPORTED_PROVIDERS = (AuthProvider.GOOGLE, AuthProvider.FACEBOOK)


def parse_provider(provider_name: str) -> AuthProvider:
    """Match a provider name case-insensitively.

    Raises:
        UnsupportedProviderError: If the name is not a social provider
    """
    try:
        provider = AuthProvider(provider_name.strip().lower())
    except ValueError:
        raise UnsupportedProviderError(provider_name)
    if provider not in SUPPORTED_PROVIDERS:
        raise UnsupportedProviderError(provider_name)
    return provider


def _text(value: Any) -> str | None:
    """Return a non-blank string or None."""
    if isinstance(value, str) and value.strip():
        return value
    return None


def _google_email(attributes: dict[str, Any]) -> str | None:
    # Top-level attribute, then ID-token claims, then userinfo claims
    candidates = [
        attributes.get("email"),
        (attributes.get("id_token_claims") or {}).get("email"),
        (attributes.get("userinfo") or {}).get("email"),
    ]
    for candidate in candidates:
        email = _text(candidate)
        if email:
            return email
    return None


def _facebook_avatar(picture: Any) -> str | None:
    # Graph API nests the URL as picture.data.url
    if isinstance(picture, dict):
        data = picture.get("data")
        if isinstance(data, dict):
            return _text(data.get("url"))
        return None
    return _text(picture)


def _provider_user_id(provider: AuthProvider, value: Any) -> str:
    # Graph API ids may arrive as numbers; None and blanks are rejected
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    user_id = _text(value)
    if user_id is None:
        raise MissingProviderUserIdError(provider.value)
    return user_id


class IdentityNormalizer(Service):
    """Maps Google and Facebook attribute payloads onto one identity shape."""

    def normalize(
        self, provider_name: str, raw_attributes: dict[str, Any]
    ) -> NormalizedIdentity:
        """Normalize a provider payload.

        Args:
            provider_name: Provider name, matched case-insensitively
            raw_attributes: Provider user-info attributes

        Returns:
            Normalized identity

        Raises:
            UnsupportedProviderError: If the provider is not Google or Facebook
            MissingEmailError: If no email can be found
            MissingProviderUserIdError: If the payload has no user id
        """
        provider = parse_provider(provider_name)

        with logfire.span("identity_normalizer.normalize", provider=provider.value):
            if provider == AuthProvider.GOOGLE:
                identity = self._normalize_google(raw_attributes)
            else:
                identity = self._normalize_facebook(raw_attributes)

            logfire.info(
                "Identity normalized",
                provider=provider.value,
                provider_user_id=identity.provider_user_id,
            )
            return identity

    def normalize_principal(
        self, principal: AuthenticatedPrincipal
    ) -> NormalizedIdentity:
        """Normalize an authenticated principal returned by an OAuth client."""
        return self.normalize(principal.provider.value, principal.raw_attributes())

    def extract_email(self, principal: AuthenticatedPrincipal) -> str | None:
        """Extract the email from a principal, or None if it carries none."""
        match principal:
            case OidcPrincipal():
                return _google_email(principal.raw_attributes())
            case OAuth2Principal():
                return _text(principal.attributes.get("email"))

    def _normalize_google(self, attributes: dict[str, Any]) -> NormalizedIdentity:
        email = _google_email(attributes)
        if email is None:
            raise MissingEmailError(AuthProvider.GOOGLE.value)

        return NormalizedIdentity(
            provider=AuthProvider.GOOGLE,
            provider_user_id=_provider_user_id(
                AuthProvider.GOOGLE, attributes.get("sub")
            ),
            email=email,
            display_name=_text(attributes.get("name")),
            avatar_url=_text(attributes.get("picture")),
        )

    def _normalize_facebook(self, attributes: dict[str, Any]) -> NormalizedIdentity:
        email = _text(attributes.get("email"))
        if email is None:
            raise MissingEmailError(AuthProvider.FACEBOOK.value)

        return NormalizedIdentity(
            provider=AuthProvider.FACEBOOK,
            provider_user_id=_provider_user_id(
                AuthProvider.FACEBOOK, attributes.get("id")
            ),
            email=email,
            display_name=_text(attributes.get("name")),
            avatar_url=_facebook_avatar(attributes.get("picture")),
        )
