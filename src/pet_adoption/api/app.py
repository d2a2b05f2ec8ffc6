"""
pet_adoption.api.app

FastAPI app factory for the pet adoption service.

Responsibilities:
- Build the FastAPI application and register routers/middleware/error handlers.
- Initialize and dispose shared infrastructure (DB engine/session factory).
- Provide a single composition root where cross-cutting concerns live.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pet_adoption import __version__
from pet_adoption.api.errors import register_exception_handlers
from pet_adoption.api.routers.adopters import router as adopters_router
from pet_adoption.api.routers.adoptions import router as adoptions_router
from pet_adoption.api.routers.animals import router as animals_router
from pet_adoption.api.routers.auth import router as auth_router
from pet_adoption.api.routers.health import router as health_router
from pet_adoption.api.routers.shelters import router as shelters_router
from pet_adoption.db.init_db import init_db
from pet_adoption.db.session import create_engine, create_sessionmaker
from pet_adoption.observability.logging import configure_logging, get_logger
from pet_adoption.observability.middleware import RequestContextMiddleware
from pet_adoption.settings import Settings, get_settings

log = get_logger(__name__)


def create_app(*, settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(service_name=settings.service_name, level=settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("startup", env=settings.env)
        engine = create_engine(settings)
        app.state.engine = engine
        app.state.sessionmaker = create_sessionmaker(engine)
        if settings.env in ("dev", "test"):
            # Prod schema changes go through Alembic.
            await init_db(engine)
        try:
            yield
        finally:
            await engine.dispose()
            log.info("shutdown")

    app = FastAPI(
        title="Pet Adoption API",
        version=__version__,
        docs_url="/docs",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestContextMiddleware)
    register_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(shelters_router)
    app.include_router(adopters_router)
    app.include_router(animals_router)
    app.include_router(adoptions_router)

    return app


# --- Module Notes -----------------------------------------------------------
# App composition stays here; validation and integrity rules live in services.
