"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from skb_backend.api.auth import SessionRejected
from skb_backend.api.auth import router as auth_router
from skb_backend.api.images import router as images_router
from skb_backend.api.responses import failure
from skb_backend.api.statistics import router as statistics_router
from skb_backend.app_logging import configure_logging
from skb_backend.containers import AppContainer


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info(
            "Backend starting", extra={"environment": container.settings.environment}
        )
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[container.settings.allowed_origin],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(SessionRejected)
    async def session_rejected(
        _request: Request, _exc: SessionRejected
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"success": False, "valid": False, "error": "Sesi tidak valid"},
        )

    @app.exception_handler(RequestValidationError)
    async def invalid_request(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        logger.warning(
            "Rejected malformed request",
            extra={"path": request.url.path, "errors": exc.errors()},
        )
        return failure(status.HTTP_400_BAD_REQUEST, "Data permintaan tidak valid")

    app.include_router(auth_router)
    app.include_router(images_router)
    app.include_router(statistics_router)

    @app.get("/")
    async def root() -> dict[str, str]:
        """Liveness message for the frontend."""
        return {"message": "Backend SKB aktif"}

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
