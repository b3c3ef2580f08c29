"""
namuh_access.api.app

FastAPI app factory for the namuh access service.

Responsibilities:
- Build the FastAPI application and register routers/middleware.
- Own the lifecycle of shared infrastructure: DB engine, sessionmaker, session store.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import timedelta

from fastapi import FastAPI

from namuh_access.api.routers.access import router as access_router
from namuh_access.api.routers.dev import router as dev_router
from namuh_access.api.routers.health import router as health_router
from namuh_access.api.routers.internal.router import router as internal_router
from namuh_access.api.routers.sessions import router as sessions_router
from namuh_access.api.routers.tiers import router as tiers_router
from namuh_access.auth.jwt import JwtConfig
from namuh_access.auth.session import SessionStore
from namuh_access.db.init_db import init_db
from namuh_access.db.session import create_engine, create_sessionmaker
from namuh_access.observability.logging import configure_logging, get_logger
from namuh_access.observability.middleware import RequestContextMiddleware
from namuh_access.settings import Settings

log = get_logger(__name__)


def create_app(*, settings: Settings) -> FastAPI:
    configure_logging(
        service_name=settings.service_name,
        level=settings.log_level,
        json_logs=settings.log_json,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("startup", env=settings.env)
        engine = create_engine(settings)
        app.state.engine = engine
        app.state.sessionmaker = create_sessionmaker(engine)
        if settings.env in ("dev", "test"):
            # Prod creates tables out of band.
            await init_db(engine)
        app.state.session_store = SessionStore(
            session_factory=app.state.sessionmaker,
            jwt_cfg=JwtConfig.from_settings(settings),
            ttl=timedelta(minutes=settings.session_ttl_minutes),
        )
        try:
            yield
        finally:
            app.state.session_store.close()
            await engine.dispose()
            log.info("shutdown")

    app = FastAPI(
        title="namuh access",
        version="0.1.0",
        docs_url="/docs",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(RequestContextMiddleware)
    app.include_router(health_router, tags=["health"])
    app.include_router(dev_router)
    app.include_router(sessions_router)
    app.include_router(access_router)
    app.include_router(tiers_router)
    app.include_router(internal_router)

    return app


# --- Module Notes -----------------------------------------------------------
# Composition only; decisions live in `access`, persistence in `db`.
