"""
tk_admin.api.app

FastAPI app factory for the admin functions service.

Responsibilities:
- Build the FastAPI application and register routers/middleware.
- Own the identity backend: use an injected one, or build the hosted-backend
  client on startup and close it on shutdown.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from tk_admin import __version__
from tk_admin.api.routers.functions import router as functions_router
from tk_admin.api.routers.health import router as health_router
from tk_admin.identity.ports import IdentityBackend
from tk_admin.identity.supabase import SupabaseIdentityBackend, create_http_client
from tk_admin.observability.logging import configure_logging, get_logger
from tk_admin.observability.middleware import RequestContextMiddleware
from tk_admin.settings import Settings

log = get_logger(__name__)


def create_app(*, settings: Settings, identity_backend: IdentityBackend | None = None) -> FastAPI:
    configure_logging(service_name=settings.service_name, level=settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("startup", env=settings.env)
        http = None
        if app.state.identity_backend is None:
            http = create_http_client(settings)
            app.state.identity_backend = SupabaseIdentityBackend(settings=settings, http=http)
        try:
            yield
        finally:
            if http is not None:
                await http.aclose()
                app.state.identity_backend = None
            log.info("shutdown")

    app = FastAPI(
        title="TkSolution Admin Functions",
        version=__version__,
        docs_url=None if settings.env == "prod" else "/docs",
        openapi_url=None if settings.env == "prod" else "/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.identity_backend = identity_backend

    app.add_middleware(RequestContextMiddleware)
    app.include_router(health_router, tags=["health"])
    app.include_router(functions_router)

    return app


# --- Module Notes -----------------------------------------------------------
# Tests inject `InMemoryIdentityBackend`; production leaves it unset so the
# lifespan hook wires the hosted backend.
