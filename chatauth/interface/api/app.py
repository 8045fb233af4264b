"""FastAPI application."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from dishka import AsyncContainer
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from chatauth.config import DEFAULT_JWT_SECRET, Settings
from chatauth.interface.api.errors import register_error_handlers
from chatauth.interface.api.routes import auth, health, oauth2
from chatauth.util.di.container import create_container, setup_di
from chatauth.util.error import ConfigurationError
from chatauth.util.logging import setup_logging
from chatauth.util.observability import instrument_fastapi, instrument_httpx

# HS512 needs at least a 512-bit key
MIN_PRODUCTION_SECRET_LENGTH = 64


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Close the DI container on shutdown (disposes DB engine and Redis client)."""
    yield
    await app.state.dishka_container.close()


def check_settings(settings: Settings) -> None:
    """Refuse to start outside development with an unusable JWT secret.

    Raises:
        ConfigurationError: If the secret is the placeholder or too short
    """
    if settings.environment in ("test", "development"):
        return
    secret = settings.auth.jwt_secret
    if secret == DEFAULT_JWT_SECRET or len(secret) < MIN_PRODUCTION_SECRET_LENGTH:
        raise ConfigurationError(
            "AUTH__JWT_SECRET must be set to at least "
            f"{MIN_PRODUCTION_SECRET_LENGTH} characters in {settings.environment}"
        )


def create_app(
    container: AsyncContainer | None = None, settings: Settings | None = None
) -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.
    In tests, conftest.py does.

    Args:
        container: DI container (defaults to the production container)
        settings: Settings for app-level setup (defaults to environment)
    """
    settings = settings or Settings()
    check_settings(settings)
    setup_logging(settings)

    # Instrument httpx for outbound calls to identity providers
    instrument_httpx()

    app_instance = FastAPI(
        title="Chat Auth API",
        description="User identity service for the chat application: social login, JWT issuance and state-token handoff",
        version="0.1.0",
        lifespan=lifespan,
    )

    instrument_fastapi(app_instance)

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors.allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=[
            "Authorization",
            "Content-Type",
            "Accept",
            "Origin",
            "X-Requested-With",
        ],
        expose_headers=["Content-Length", "Content-Type"],
        max_age=600,  # Cache preflight requests for 10 minutes
    )

    register_error_handlers(app_instance)

    setup_di(app_instance, container or create_container())

    app_instance.include_router(health.router)
    app_instance.include_router(oauth2.router)
    app_instance.include_router(auth.router)

    return app_instance
