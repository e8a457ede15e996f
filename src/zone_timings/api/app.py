"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from zone_timings.api.admin import router as admin_router
from zone_timings.api.auth import router as auth_router
from zone_timings.api.zones import router as zones_router
from zone_timings.app_logging import configure_logging
from zone_timings.containers import AppContainer, build_container
from zone_timings.exceptions import (
    AuthenticationError,
    PermissionDeniedError,
    StoreError,
    ValidationError,
    ZoneTimingsError,
)

_ERROR_STATUS: tuple[tuple[type[ZoneTimingsError], int], ...] = (
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (PermissionDeniedError, status.HTTP_403_FORBIDDEN),
    (AuthenticationError, status.HTTP_401_UNAUTHORIZED),
    (StoreError, status.HTTP_502_BAD_GATEWAY),
)


def create_app(container: AppContainer | None = None) -> FastAPI:
    """Create a FastAPI app; the container is built on startup when omitted."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if app.state.container is None:
            app.state.container = await build_container()
        try:
            await app.state.container.start()
        except Exception:
            logger.exception("Failed to start zone synchronization")
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(auth_router)
    app.include_router(zones_router)
    app.include_router(admin_router)

    @app.exception_handler(ZoneTimingsError)
    async def handle_domain_error(
        request: Request, exc: ZoneTimingsError
    ) -> JSONResponse:
        status_code = _status_for(exc)
        if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=status_code, content={"detail": str(exc)})

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app


def _status_for(exc: ZoneTimingsError) -> int:
    for error_type, status_code in _ERROR_STATUS:
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR
