"""
community_hub.api.app

FastAPI app factory for the community service.

Responsibilities:
- Build the FastAPI application and register routers/middleware/error handlers.
- Initialize and dispose shared infrastructure (DB engine/session factory) in the lifespan.
- Create the bootstrap administrator when configured.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from community_hub import __version__
from community_hub.api.errors import install_error_handlers
from community_hub.api.routers.activities import router as activities_router
from community_hub.api.routers.amenities import router as amenities_router
from community_hub.api.routers.auth import router as auth_router
from community_hub.api.routers.health import router as health_router
from community_hub.api.routers.payments import router as payments_router
from community_hub.api.routers.reports import router as reports_router
from community_hub.api.routers.residences import router as residences_router
from community_hub.api.routers.users import router as users_router
from community_hub.db.init_db import init_db
from community_hub.db.session import create_engine, create_sessionmaker
from community_hub.observability.logging import configure_logging, get_logger
from community_hub.observability.middleware import RequestContextMiddleware
from community_hub.services.auth_service import AuthService
from community_hub.settings import Settings

log = get_logger(__name__)


def create_app(*, settings: Settings) -> FastAPI:
    configure_logging(
        service_name=settings.service_name,
        level=settings.log_level,
        json=settings.env != "dev",
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("startup", env=settings.env)
        engine = create_engine(settings)
        app.state.engine = engine
        app.state.sessionmaker = create_sessionmaker(engine)
        if settings.env in ("dev", "test"):
            # Prod databases are provisioned out of band.
            await init_db(engine)
        if settings.bootstrap_admin_email and settings.bootstrap_admin_password:
            async with app.state.sessionmaker() as session:
                await AuthService(session=session, settings=settings).ensure_admin(
                    email=settings.bootstrap_admin_email.strip().lower(),
                    password=settings.bootstrap_admin_password,
                )
        try:
            yield
        finally:
            await engine.dispose()
            log.info("shutdown")

    app = FastAPI(
        title="Community Hub API",
        version=__version__,
        docs_url="/docs",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestContextMiddleware)
    install_error_handlers(app, settings=settings)

    app.include_router(health_router, tags=["health"])
    app.include_router(auth_router)
    app.include_router(users_router)
    app.include_router(residences_router)
    app.include_router(amenities_router)
    app.include_router(activities_router)
    app.include_router(reports_router)
    app.include_router(payments_router)

    return app


# --- Module Notes -----------------------------------------------------------
# Settings live on app.state rather than behind `get_settings()` so tests can
# build apps with their own database and secrets side by side.
