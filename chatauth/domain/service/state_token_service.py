"""State-token handoff domain service."""

import uuid
from datetime import timedelta

import logfire

from chatauth.config import AuthSettings
from chatauth.domain.error import StateTokenInvalidError, StateTokenMissingError
from chatauth.domain.repository import HandoffStore
from chatauth.domain.value import HandoffPayload, HandoffToken

from .base import Service


def mask_token(token: str) -> str:
    """Shorten a token for logs."""
    return f"{token[:8]}..." if len(token) > 8 else "***"


class StateTokenService(Service):
    """One-time handoff of issued tokens to the frontend.

    The login redirect carries only an opaque handoff token; the frontend
    exchanges it exactly once for the real token pair.
    """

    def __init__(self, handoff_store: HandoffStore, auth_settings: AuthSettings) -> None:
        """Initialize state token service.

        Args:
            handoff_store: Backing store for handoff entries
            auth_settings: Authentication settings (handoff TTL)
        """
        self.handoff_store = handoff_store
        self.ttl = timedelta(seconds=auth_settings.state_token_ttl_seconds)

    def generate_state_token(self) -> HandoffToken:
        """Generate a fresh random handoff token."""
        return HandoffToken(str(uuid.uuid4()))

    async def store(self, payload: HandoffPayload) -> HandoffToken:
        """Store a payload under a new handoff token.

        Args:
            payload: Tokens and identity fields to hand off

        Returns:
            The handoff token to put in the redirect
        """
        token = self.generate_state_token()
        with logfire.span("state_token_service.store", state=mask_token(token)):
            await self.handoff_store.put(token, payload, self.ttl)
            logfire.info(
                "State token stored",
                state=mask_token(token),
                user_id=payload.user_id,
                ttl_seconds=int(self.ttl.total_seconds()),
            )
            return token

    async def exchange(self, token: str | None) -> HandoffPayload:
        """Consume a handoff token.

        Args:
            token: Handoff token from the frontend

        Returns:
            The stored payload

        Raises:
            StateTokenMissingError: If the token is missing or blank
            StateTokenInvalidError: If there is no live entry, whether it never
                existed, expired or was already used
        """
        if token is None or not token.strip():
            raise StateTokenMissingError()

        with logfire.span("state_token_service.exchange", state=mask_token(token)):
            payload = await self.handoff_store.take(HandoffToken(token))
            if payload is None:
                logfire.warn("State token rejected", state=mask_token(token))
                raise StateTokenInvalidError()

            logfire.info(
                "State token exchanged",
                state=mask_token(token),
                user_id=payload.user_id,
            )
            return payload
