"""Unit tests for the migration runner script."""

import pytest

from chatauth.config import DatabaseSettings, Settings
from scripts import run_migrations


@pytest.fixture
def upgrades(monkeypatch) -> list[tuple[str, str]]:
    """Record alembic upgrades instead of touching a database."""
    calls = []

    def fake_upgrade(config, revision):
        calls.append((config.get_main_option("sqlalchemy.url"), revision))

    monkeypatch.setattr(run_migrations.command, "upgrade", fake_upgrade)
    monkeypatch.setattr(run_migrations, "configure_logfire", lambda settings: None)
    monkeypatch.setenv("DATABASE__URL", "postgresql+asyncpg://chat:p%40ss@db:5432/chat")
    return calls


class TestBuildAlembicConfig:
    def test_uses_settings_url_and_repo_migrations(self):
        settings = Settings(
            database=DatabaseSettings(url="postgresql+asyncpg://u:pw@db:5432/chat")
        )

        config = run_migrations.build_alembic_config(settings)

        assert config.get_main_option("sqlalchemy.url") == settings.database_url
        assert config.get_main_option("script_location").endswith("migrations")


class TestMain:
    def test_upgrades_to_head_by_default(self, upgrades):
        assert run_migrations.main([]) == 0

        assert upgrades == [("postgresql+asyncpg://chat:p%40ss@db:5432/chat", "head")]

    def test_upgrades_to_requested_revision(self, upgrades):
        run_migrations.main(["3c9e51a0d7b2"])

        assert upgrades[0][1] == "3c9e51a0d7b2"

    def test_failure_is_reraised(self, monkeypatch, upgrades):
        def broken_upgrade(config, revision):
            raise RuntimeError("connection refused")

        monkeypatch.setattr(run_migrations.command, "upgrade", broken_upgrade)

        with pytest.raises(RuntimeError):
            run_migrations.main([])
