"""Tinta Fresca API — FastAPI application factory and entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map TintaFrescaError → structured JSON responses
    - Store pool and identity client created once in the lifespan and kept on app.state
    - Missing required configuration exits the process before the app is built

Design Decisions:
    - create_app() factory over a bare module-level app: tests and scripts can build an
      app from explicit Settings; `app` is still exported for `uvicorn tinta_fresca.main:app`
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from tinta_fresca.api.error_handlers import register_error_handlers
from tinta_fresca.api.routes import admin_users, health, schools, users
from tinta_fresca.config import Settings, get_settings_or_exit
from tinta_fresca.infrastructure.database import DatabaseSessionManager
from tinta_fresca.infrastructure.identity_client import IdentityProviderClient
from tinta_fresca.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings: Settings = app.state.settings
    setup_logging(settings.log_level, settings.log_format)
    app.state.db_manager = DatabaseSessionManager.from_url(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    app.state.identity_provider = IdentityProviderClient(
        settings.supabase_url,
        anon_key=settings.supabase_anon_key,
        service_role_key=settings.supabase_service_role_key,
        timeout_seconds=settings.identity_timeout_seconds,
    )
    logger.info("Tinta Fresca API started")
    yield
    logger.info("Tinta Fresca API shutting down")
    await app.state.identity_provider.aclose()
    await app.state.db_manager.dispose()


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings_or_exit()

    app = FastAPI(
        title="Tinta Fresca API", version="1.0.0", lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/", response_class=PlainTextResponse, include_in_schema=False)
    async def root():
        return "Tinta Fresca API is running"

    app.include_router(health.router)
    app.include_router(schools.router)
    app.include_router(users.router)
    app.include_router(admin_users.router)

    register_error_handlers(app)
    return app


app = create_app()
