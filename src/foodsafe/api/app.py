"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from foodsafe.api.profile import router as profile_router
from foodsafe.api.scans import router as scans_router
from foodsafe.app_logging import configure_logging
from foodsafe.containers import AppContainer
from foodsafe.domain.errors import (
    AuthenticationError,
    FoodSafeError,
    InferenceUnavailable,
    InvalidModelOutput,
    ProfileNotFound,
    ScanNotFound,
    ValidationError,
)

_ERROR_STATUS: dict[type[FoodSafeError], int] = {
    ValidationError: 422,
    InvalidModelOutput: status.HTTP_502_BAD_GATEWAY,
    InferenceUnavailable: status.HTTP_503_SERVICE_UNAVAILABLE,
    AuthenticationError: status.HTTP_401_UNAUTHORIZED,
    ProfileNotFound: status.HTTP_404_NOT_FOUND,
    ScanNotFound: status.HTTP_404_NOT_FOUND,
}


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(title="FoodSafe", lifespan=lifespan)
    app.state.container = container

    app.include_router(profile_router)
    app.include_router(scans_router)

    @app.exception_handler(FoodSafeError)
    async def handle_food_safe_error(
        request: Request, exc: FoodSafeError
    ) -> JSONResponse:
        status_code = _status_for(exc)
        if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.warning("%s on %s: %s", type(exc).__name__, request.url.path, exc)
        return JSONResponse(status_code=status_code, content=_error_body(exc))

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app


def _status_for(exc: FoodSafeError) -> int:
    for error_type in type(exc).__mro__:
        if error_type in _ERROR_STATUS:
            return _ERROR_STATUS[error_type]
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def _error_body(exc: FoodSafeError) -> dict[str, object]:
    body: dict[str, object] = {"error": type(exc).__name__, "detail": str(exc)}
    if isinstance(exc, ValidationError):
        body["fields"] = [
            {"path": error.path, "message": error.message} for error in exc.errors
        ]
    return body
