#!/usr/bin/env python3
"""Upgrade the users schema, reporting progress and failures to Logfire.

Usage:
    python scripts/run_migrations.py [revision]

The revision defaults to "head". The database URL always comes from
Settings (DATABASE__URL), never from alembic.ini.
"""

import sys
from pathlib import Path

import logfire
from alembic import command
from alembic.config import Config
from sqlalchemy.engine import make_url

from chatauth.config import Settings
from chatauth.util.observability import configure_logfire

ALEMBIC_INI = Path(__file__).resolve().parent.parent / "alembic.ini"


def build_alembic_config(settings: Settings) -> Config:
    """Alembic config pointing at this repo's migrations and the configured DB."""
    alembic_cfg = Config(str(ALEMBIC_INI))
    alembic_cfg.set_main_option(
        "script_location", str(ALEMBIC_INI.parent / "migrations")
    )
    # Escape % so ConfigParser interpolation leaves URL-encoded passwords alone
    alembic_cfg.set_main_option(
        "sqlalchemy.url", settings.database_url.replace("%", "%%")
    )
    return alembic_cfg


def main(argv: list[str] | None = None) -> int:
    """Run migrations up to the requested revision."""
    args = sys.argv[1:] if argv is None else argv
    revision = args[0] if args else "head"
    settings = Settings()

    configure_logfire(settings)

    database = make_url(settings.database_url)
    with logfire.span(
        "run_migrations",
        revision=revision,
        database_host=database.host,
        database_name=database.database,
    ):
        try:
            command.upgrade(build_alembic_config(settings), revision)
        except Exception as e:
            logfire.error(
                "Database migration failed",
                revision=revision,
                error=str(e),
                error_type=type(e).__name__,
                _exc_info=sys.exc_info(),
            )
            # Re-raise so the deploy stops before the app starts on a stale schema
            raise

        logfire.info("Users schema at revision", revision=revision)
        return 0


if __name__ == "__main__":
    sys.exit(main())
