"""Test configuration and fixtures."""

from datetime import datetime, timedelta, timezone

import logfire
import pytest

from chatauth.config import AuthSettings

# Keep spans local; nothing is exported from tests
logfire.configure(send_to_logfire=False, console=False)

TEST_JWT_SECRET = "test-secret-" + "x" * 64


class FakeClock:
    """Settable clock for expiry tests."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2026, 1, 1, 12, 0, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now = self.now + timedelta(seconds=seconds)


@pytest.fixture
def clock() -> FakeClock:
    """Clock pinned to a whole second."""
    return FakeClock()


@pytest.fixture
def auth_settings() -> AuthSettings:
    """Auth settings with a fixed test secret."""
    return AuthSettings(jwt_secret=TEST_JWT_SECRET)
