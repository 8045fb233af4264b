"""Authenticated principals returned by provider OAuth clients.

A principal is either an OpenID Connect principal (Google) carrying ID-token
and userinfo claims, or a plain OAuth2 principal (Facebook) carrying only the
user-info attributes. The `kind` tag discriminates the two.
"""

from typing import Annotated, Any, Literal, Union

from pydantic import Field, TypeAdapter

from chatauth.domain.value.common import ValueObject
from chatauth.domain.value.types import AuthProvider


class OidcPrincipal(ValueObject):
    """Principal from an OIDC login."""

    kind: Literal["oidc"] = "oidc"
    provider: AuthProvider
    attributes: dict[str, Any]
    id_token_claims: dict[str, Any] | None = None
    userinfo_claims: dict[str, Any] | None = None

    def raw_attributes(self) -> dict[str, Any]:
        """Attributes with the ID-token and userinfo claims nested in."""
        return {
            **self.attributes,
            "id_token_claims": self.id_token_claims or {},
            "userinfo": self.userinfo_claims or {},
        }


class OAuth2Principal(ValueObject):
    """Principal from a plain (non-OIDC) OAuth2 login."""

    kind: Literal["oauth2"] = "oauth2"
    provider: AuthProvider
    attributes: dict[str, Any]

    def raw_attributes(self) -> dict[str, Any]:
        """Provider user-info attributes as returned."""
        return dict(self.attributes)


AuthenticatedPrincipal = Annotated[
    Union[OidcPrincipal, OAuth2Principal], Field(discriminator="kind")
]

principal_adapter: TypeAdapter[AuthenticatedPrincipal] = TypeAdapter(
    AuthenticatedPrincipal
)
