"""Unit tests for row <-> account mapping."""

import uuid
from datetime import datetime, timezone

from chatauth.domain.model import UserAccount
from chatauth.domain.value import AuthProvider, ExternalId, OnlineStatus, Username
from chatauth.persistence.mappers import row_to_user, user_to_dict


def make_account() -> UserAccount:
    now = datetime(2026, 1, 1, tzinfo=timezone.utc)
    return UserAccount(
        external_id=ExternalId(uuid.UUID("11111111-2222-3333-4444-555555555555")),
        email="a@x.com",
        username=Username("ann_lee"),
        first_name="Ann",
        last_name="Lee",
        provider=AuthProvider.GOOGLE,
        provider_user_id="g123",
        email_verified=True,
        status=OnlineStatus.ONLINE,
        created_at=now,
        modified_at=now,
    )


class TestMappers:
    def test_user_to_dict_stores_primitives_and_omits_internal_id(self):
        values = user_to_dict(make_account())

        assert "id" not in values
        assert "internal_id" not in values
        assert values["username"] == "ann_lee"
        assert values["provider"] == "google"
        assert values["status"] == "online"
        assert values["password_hash"] == "!oauth2"

    def test_row_round_trip(self):
        account = make_account()
        row = {"id": 7, **user_to_dict(account)}

        restored = row_to_user(row)

        assert restored.internal_id == 7
        assert restored.model_copy(update={"internal_id": None}) == account
