"""
resource_hub.api.app

FastAPI app factory for the Resource Hub service.

Responsibilities:
- Build the FastAPI application and register routers/middleware.
- Initialize and dispose shared infrastructure (DB engine/session factory).
- Map domain exceptions to HTTP responses.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.status import HTTP_404_NOT_FOUND, HTTP_409_CONFLICT

from resource_hub.api.routers.dev_auth import router as dev_auth_router
from resource_hub.api.routers.audit import router as audit_router
from resource_hub.api.routers.health import router as health_router
from resource_hub.api.routers.resources import router as resources_router
from resource_hub.api.routers.users import router as users_router
from resource_hub.authz.reporting import status_code_for
from resource_hub.db.init_db import init_db
from resource_hub.db.session import create_engine, create_sessionmaker
from resource_hub.errors import AuthorizationDenied, Conflict, RecordNotFound
from resource_hub.observability.logging import configure_logging, get_logger
from resource_hub.observability.middleware import RequestContextMiddleware
from resource_hub.settings import Settings

log = get_logger(__name__)


def create_app(*, settings: Settings) -> FastAPI:
    configure_logging(service_name=settings.service_name, level=settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("startup", env=settings.env)
        engine = create_engine(settings)
        app.state.engine = engine
        app.state.sessionmaker = create_sessionmaker(engine)
        if settings.env in ("dev", "test"):
            # Dev/test convenience; prod schemas are managed outside the service.
            await init_db(engine)
        try:
            yield
        finally:
            await engine.dispose()
            log.info("shutdown")

    app = FastAPI(
        title="Resource Hub",
        version="0.1.0",
        docs_url="/docs",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(RequestContextMiddleware)
    app.include_router(health_router, tags=["health"])
    app.include_router(dev_auth_router)
    app.include_router(resources_router)
    app.include_router(users_router)
    app.include_router(audit_router)

    @app.exception_handler(AuthorizationDenied)
    async def _handle_denied(_: Request, exc: AuthorizationDenied) -> JSONResponse:
        return JSONResponse(
            status_code=status_code_for(exc.report.reason, settings),
            content={"success": False, "error": exc.report.model_dump(mode="json")},
        )

    @app.exception_handler(RecordNotFound)
    async def _handle_not_found(_: Request, exc: RecordNotFound) -> JSONResponse:
        return JSONResponse(
            status_code=HTTP_404_NOT_FOUND,
            content={
                "success": False,
                "error": {
                    "reason": "NotFound",
                    "message": str(exc),
                    "entity_type": exc.entity_type.value,
                    "record_id": exc.record_id,
                },
            },
        )

    @app.exception_handler(Conflict)
    async def _handle_conflict(_: Request, exc: Conflict) -> JSONResponse:
        return JSONResponse(
            status_code=HTTP_409_CONFLICT,
            content={"success": False, "error": {"reason": "Conflict", "message": str(exc)}},
        )

    return app


# --- Module Notes -----------------------------------------------------------
# App composition stays here; authorization lives in `authz`, execution in `services`.
