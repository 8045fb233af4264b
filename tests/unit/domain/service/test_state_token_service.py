"""Unit tests for StateTokenService."""

import asyncio
import uuid

import pytest

from chatauth.domain.error import StateTokenInvalidError, StateTokenMissingError
from chatauth.domain.service import StateTokenService
from chatauth.domain.service.state_token_service import mask_token
from chatauth.domain.value import HandoffPayload
from chatauth.persistence.repository.inmemory import InMemoryHandoffStore


def make_payload() -> HandoffPayload:
    return HandoffPayload(
        access_token="access.jwt",
        refresh_token="refresh.jwt",
        user_id="11111111-2222-3333-4444-555555555555",
        username="ann_lee",
        email="a@x.com",
    )


class TestStore:
    @pytest.mark.asyncio
    async def test_store_returns_uuid_token(self, auth_settings, clock):
        store = InMemoryHandoffStore(clock=clock)
        service = StateTokenService(store, auth_settings)

        token = await service.store(make_payload())

        assert str(uuid.UUID(token)) == token
        assert len(store) == 1

    @pytest.mark.asyncio
    async def test_tokens_are_unique(self, auth_settings, clock):
        service = StateTokenService(InMemoryHandoffStore(clock=clock), auth_settings)

        first = await service.store(make_payload())
        second = await service.store(make_payload())

        assert first != second


class TestExchange:
    """Tests for StateTokenService.exchange()."""

    @pytest.mark.asyncio
    async def test_exchange_returns_payload_once(self, auth_settings, clock):
        """A handoff token can be exchanged exactly once."""
        service = StateTokenService(InMemoryHandoffStore(clock=clock), auth_settings)
        token = await service.store(make_payload())

        payload = await service.exchange(token)

        assert payload == make_payload()
        with pytest.raises(StateTokenInvalidError):
            await service.exchange(token)

    @pytest.mark.asyncio
    async def test_exchange_before_ttl_succeeds(self, auth_settings, clock):
        service = StateTokenService(InMemoryHandoffStore(clock=clock), auth_settings)
        token = await service.store(make_payload())

        clock.advance(299)

        assert (await service.exchange(token)).email == "a@x.com"

    @pytest.mark.asyncio
    async def test_exchange_after_ttl_fails(self, auth_settings, clock):
        """Entries live for five minutes."""
        store = InMemoryHandoffStore(clock=clock)
        service = StateTokenService(store, auth_settings)
        token = await service.store(make_payload())

        clock.advance(300)

        with pytest.raises(StateTokenInvalidError):
            await service.exchange(token)
        assert len(store) == 0

    @pytest.mark.asyncio
    async def test_unknown_token_is_invalid(self, auth_settings, clock):
        service = StateTokenService(InMemoryHandoffStore(clock=clock), auth_settings)

        with pytest.raises(StateTokenInvalidError):
            await service.exchange(str(uuid.uuid4()))

    @pytest.mark.asyncio
    @pytest.mark.parametrize("token", [None, "", "   "])
    async def test_missing_token(self, auth_settings, clock, token):
        service = StateTokenService(InMemoryHandoffStore(clock=clock), auth_settings)

        with pytest.raises(StateTokenMissingError):
            await service.exchange(token)

    @pytest.mark.asyncio
    async def test_concurrent_exchanges_release_payload_once(
        self, auth_settings, clock
    ):
        """Of many simultaneous exchanges exactly one gets the payload."""
        service = StateTokenService(InMemoryHandoffStore(clock=clock), auth_settings)
        token = await service.store(make_payload())

        results = await asyncio.gather(
            *(service.exchange(token) for _ in range(10)), return_exceptions=True
        )

        successes = [r for r in results if isinstance(r, HandoffPayload)]
        failures = [r for r in results if isinstance(r, StateTokenInvalidError)]
        assert len(successes) == 1
        assert len(failures) == 9


def test_mask_token_hides_most_of_token():
    assert mask_token("6f1c2d3e-aaaa-bbbb") == "6f1c2d3e..."
    assert mask_token("short") == "***"
